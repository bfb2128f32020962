"""
Notification models: admin broadcasts and per-student read receipts.

A ``NotificationRead`` row means the student has read the notification;
absence means unread.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartmess.models.base import BaseModel, TimestampMixin, enum_column_type
from smartmess.models.enums import NotificationType
from smartmess.utils.date_utils import now_utc

if TYPE_CHECKING:
    from smartmess.models.account import Student

__all__ = ["Notification", "NotificationRead"]


class Notification(BaseModel, TimestampMixin):
    __tablename__ = "notifications"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[NotificationType] = mapped_column(
        enum_column_type(NotificationType, "notification_type"),
        nullable=False,
        default=NotificationType.INFO,
    )
    target_audience: Mapped[str] = mapped_column(String(20), nullable=False, default="all")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_by: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("admins.id", ondelete="SET NULL"), nullable=True
    )

    reads: Mapped[List["NotificationRead"]] = relationship(
        back_populates="notification", cascade="all, delete-orphan"
    )


class NotificationRead(BaseModel):
    __tablename__ = "notification_reads"
    __table_args__ = (
        UniqueConstraint("notification_id", "student_id", name="uq_notification_reads_notification_student"),
    )

    notification_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("notifications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    read_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=now_utc)

    notification: Mapped["Notification"] = relationship(back_populates="reads")
    student: Mapped["Student"] = relationship(back_populates="notification_reads")
