"""
Complaint repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from smartmess.models import Complaint
from smartmess.models.enums import ComplaintStatus
from smartmess.repositories.base_repository import BaseRepository


class ComplaintRepository(BaseRepository[Complaint]):
    def __init__(self, db: Session):
        super().__init__(Complaint, db)

    def list_for_student(self, student_id: str) -> List[Complaint]:
        return self.list(student_id=student_id, order_by=[Complaint.created_at.desc()])

    def list_with_students(self, status: Optional[ComplaintStatus] = None) -> List[Complaint]:
        """All complaints with the submitting student loaded, newest first."""
        stmt = select(Complaint).options(joinedload(Complaint.student))
        if status is not None:
            stmt = stmt.where(Complaint.status == status)
        stmt = stmt.order_by(Complaint.created_at.desc())
        with self._translate_errors("List"):
            return list(self.db.scalars(stmt).all())
