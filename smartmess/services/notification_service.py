"""
Notification service: admin broadcasts and per-student read tracking.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from smartmess.core.exceptions import NotFoundError
from smartmess.models import Notification
from smartmess.repositories import NotificationReadRepository, NotificationRepository
from smartmess.schemas.notification import (
    NotificationCreate,
    NotificationOut,
    StudentNotificationOut,
    UnreadCountOut,
)

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Broadcasts are stored once and shown to every student; a read receipt
    row per (notification, student) marks it read.
    """

    def __init__(self, db: Session):
        self.db = db
        self.notifications = NotificationRepository(db)
        self.reads = NotificationReadRepository(db)

    def broadcast(self, data: NotificationCreate, admin_id: str) -> Notification:
        notification = Notification(
            title=data.title,
            message=data.message,
            type=data.type,
            target_audience="all",
            is_active=True,
            created_by=admin_id,
        )
        notification = self.notifications.insert(notification)
        logger.info(f"Notification {notification.id} broadcast by {admin_id}")
        return notification

    def list_all(self) -> List[Notification]:
        return self.notifications.list_all()

    def delete(self, notification_id: str) -> None:
        notification = self.notifications.get(notification_id)
        if notification is None:
            raise NotFoundError("Notification")
        self.notifications.delete(notification)

    def list_for_student(self, student_id: str) -> List[StudentNotificationOut]:
        """Active notifications newest first, each flagged read or unread."""
        read_ids = self.reads.read_ids_for(student_id)
        return [
            StudentNotificationOut(
                **NotificationOut.model_validate(n).model_dump(),
                is_read=n.id in read_ids,
            )
            for n in self.notifications.list_active()
        ]

    def mark_read(self, student_id: str, notification_id: str) -> None:
        """
        Mark a notification read. Marking it again is a no-op.

        Raises:
            NotFoundError: If the notification does not exist or is inactive
        """
        notification = self.notifications.get(notification_id)
        if notification is None or not notification.is_active:
            raise NotFoundError("Notification")
        self.reads.mark_read(notification_id, student_id)

    def unread_count(self, student_id: str) -> UnreadCountOut:
        total = self.notifications.count_active()
        read = self.reads.count_active_read(student_id)
        return UnreadCountOut(total=total, read=read, unread=max(total - read, 0))
