"""
Complaint service: submission by students, status transitions by admins.

This service keeps ``resolved_at``/``resolved_by`` in step with the
status: both are set when a complaint becomes resolved and cleared when
it moves to any other status.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from smartmess.core.exceptions import NotFoundError
from smartmess.models import Complaint
from smartmess.models.enums import ComplaintStatus
from smartmess.repositories import ComplaintRepository
from smartmess.schemas.complaint import ComplaintCreate, ComplaintStatusUpdate
from smartmess.utils.date_utils import now_utc

logger = logging.getLogger(__name__)


class ComplaintService:
    def __init__(self, db: Session):
        self.db = db
        self.complaints = ComplaintRepository(db)

    def submit(self, student_id: str, data: ComplaintCreate) -> Complaint:
        """
        File a new complaint. The status always starts as pending.

        Args:
            student_id: Submitting student
            data: Category, subject, description and optional priority
        """
        complaint = Complaint(
            student_id=student_id,
            category=data.category,
            subject=data.subject,
            description=data.description,
            priority=data.priority,
            status=ComplaintStatus.PENDING,
        )
        complaint = self.complaints.insert(complaint)
        logger.info(f"Complaint {complaint.id} filed by {student_id} ({data.category.value})")
        return complaint

    def list_mine(self, student_id: str) -> List[Complaint]:
        return self.complaints.list_for_student(student_id)

    def get_mine(self, complaint_id: str, student_id: str) -> Complaint:
        """A student's own complaint; anyone else's reads as not found."""
        complaint = self.complaints.get(complaint_id)
        if complaint is None or complaint.student_id != student_id:
            raise NotFoundError("Complaint")
        return complaint

    def list_all(self, status: Optional[ComplaintStatus] = None) -> List[Complaint]:
        return self.complaints.list_with_students(status)

    def update_status(self, complaint_id: str, data: ComplaintStatusUpdate, admin_id: str) -> Complaint:
        """
        Move a complaint to a new status.

        The admin response is only overwritten when one is supplied.

        Raises:
            NotFoundError: If the complaint does not exist
        """
        complaint = self.complaints.get(complaint_id)
        if complaint is None:
            raise NotFoundError("Complaint")

        now = now_utc()
        changes = {"status": data.status, "updated_at": now}
        if data.admin_response is not None:
            changes["admin_response"] = data.admin_response

        if data.status == ComplaintStatus.RESOLVED:
            changes["resolved_at"] = now
            changes["resolved_by"] = admin_id
        else:
            changes["resolved_at"] = None
            changes["resolved_by"] = None

        complaint = self.complaints.update(complaint, changes)
        logger.info(f"Complaint {complaint_id} -> {data.status.value} by {admin_id}")
        return complaint
