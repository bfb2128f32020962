"""
Rating model: a student's 1-5 score for one meal of one menu.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartmess.models.base import BaseModel, TimestampMixin, enum_column_type
from smartmess.models.enums import MealType

if TYPE_CHECKING:
    from smartmess.models.account import Student
    from smartmess.models.menu import Menu

__all__ = ["Rating"]


class Rating(BaseModel, TimestampMixin):
    """At most one row per (student, menu, meal type); resubmission updates it."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("student_id", "menu_id", "meal_type", name="uq_ratings_student_menu_meal"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_ratings_rating_range"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menus.id", ondelete="CASCADE"), nullable=False, index=True
    )
    meal_type: Mapped[MealType] = mapped_column(enum_column_type(MealType, "meal_type"), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    student: Mapped["Student"] = relationship(back_populates="ratings")
    menu: Mapped["Menu"] = relationship(back_populates="ratings")
