"""
Notification and read-receipt repositories.
"""

from typing import List, Set

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from smartmess.models import Notification, NotificationRead
from smartmess.repositories.base_repository import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, db: Session):
        super().__init__(Notification, db)

    def list_active(self) -> List[Notification]:
        return self.list(Notification.is_active.is_(True), order_by=[Notification.created_at.desc()])

    def list_all(self) -> List[Notification]:
        return self.list(order_by=[Notification.created_at.desc()])

    def count_active(self) -> int:
        return self.count(Notification.is_active.is_(True))


class NotificationReadRepository(BaseRepository[NotificationRead]):
    def __init__(self, db: Session):
        super().__init__(NotificationRead, db)

    def mark_read(self, notification_id: str, student_id: str) -> NotificationRead:
        """
        Record that the student read the notification.

        Re-marking keeps the original read time.
        """
        read, _ = self.upsert(
            {"notification_id": notification_id, "student_id": student_id},
            conflict_columns=["notification_id", "student_id"],
            update_columns=[],
        )
        return read

    def read_ids_for(self, student_id: str) -> Set[str]:
        stmt = select(NotificationRead.notification_id).where(NotificationRead.student_id == student_id)
        with self._translate_errors("List"):
            return set(self.db.scalars(stmt).all())

    def count_active_read(self, student_id: str) -> int:
        """Distinct active notifications the student has read."""
        stmt = (
            select(func.count(func.distinct(NotificationRead.notification_id)))
            .join(Notification, Notification.id == NotificationRead.notification_id)
            .where(NotificationRead.student_id == student_id, Notification.is_active.is_(True))
        )
        with self._translate_errors("Count"):
            return int(self.db.scalar(stmt) or 0)
