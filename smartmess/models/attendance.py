"""
Meal attendance model: whether a student will eat a given meal on a given day.
"""

from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartmess.models.base import BaseModel, TimestampMixin, enum_column_type
from smartmess.models.enums import AttendanceStatus, MealType

if TYPE_CHECKING:
    from smartmess.models.account import Student

__all__ = ["MealAttendance"]


class MealAttendance(BaseModel, TimestampMixin):
    """At most one row per (student, date, meal type); re-marking overwrites."""

    __tablename__ = "meal_attendance"
    __table_args__ = (
        UniqueConstraint("student_id", "date", "meal_type", name="uq_attendance_student_date_meal"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    attendance_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    meal_type: Mapped[MealType] = mapped_column(enum_column_type(MealType, "meal_type"), nullable=False)
    status: Mapped[AttendanceStatus] = mapped_column(
        enum_column_type(AttendanceStatus, "attendance_status"), nullable=False
    )
    marked_by: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("admins.id", ondelete="SET NULL"), nullable=True
    )

    student: Mapped["Student"] = relationship(back_populates="attendance")
