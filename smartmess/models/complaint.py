"""
Complaint model: filed by a student, transitioned only by administrators.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartmess.models.base import BaseModel, TimestampMixin, enum_column_type
from smartmess.models.enums import ComplaintCategory, ComplaintPriority, ComplaintStatus

if TYPE_CHECKING:
    from smartmess.models.account import Student

__all__ = ["Complaint"]


class Complaint(BaseModel, TimestampMixin):
    """
    Student complaint.

    ``resolved_at`` and ``resolved_by`` are non-null exactly while the
    status is ``resolved``.
    """

    __tablename__ = "complaints"

    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category: Mapped[ComplaintCategory] = mapped_column(
        enum_column_type(ComplaintCategory, "complaint_category"), nullable=False
    )
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[ComplaintPriority] = mapped_column(
        enum_column_type(ComplaintPriority, "complaint_priority"),
        nullable=False,
        default=ComplaintPriority.MEDIUM,
    )
    status: Mapped[ComplaintStatus] = mapped_column(
        enum_column_type(ComplaintStatus, "complaint_status"),
        nullable=False,
        default=ComplaintStatus.PENDING,
        index=True,
    )
    admin_response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    resolved_by: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("admins.id", ondelete="SET NULL"), nullable=True
    )

    student: Mapped["Student"] = relationship(back_populates="complaints")
