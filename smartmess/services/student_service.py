"""
Student account service: creation and administrator management.

New accounts always start unverified; an administrator grants access with
`verify` and can suspend it with `toggle_status`.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from smartmess.config.settings import Settings
from smartmess.core.exceptions import NotFoundError, ValidationError
from smartmess.core.security import PasswordHasher
from smartmess.models import Student
from smartmess.repositories import StudentRepository
from smartmess.schemas.student import StudentCreate, StudentListItem, StudentOut

logger = logging.getLogger(__name__)


class StudentService:
    """Create, list, verify, suspend and delete student accounts."""

    def __init__(self, db: Session, settings: Settings, hasher: PasswordHasher):
        self.db = db
        self.settings = settings
        self.hasher = hasher
        self.students = StudentRepository(db)

    def create(self, data: StudentCreate) -> Student:
        """
        Create an unverified student account.

        Uniqueness of email and roll number is enforced by the database;
        a duplicate surfaces as ConflictError.

        Raises:
            ValidationError: If the password is shorter than the minimum
            ConflictError: If the email or roll number is taken
        """
        if len(data.password) < self.settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {self.settings.PASSWORD_MIN_LENGTH} characters",
                field_errors={"password": ["too short"]},
            )

        student = Student(
            name=data.name,
            email=data.email.lower(),
            password_hash=self.hasher.hash(data.password),
            roll_number=data.roll_number,
            hostel_name=data.hostel_name,
            room_number=data.room_number,
            phone_number=data.phone_number,
            is_verified=False,
            is_active=True,
        )
        student = self.students.insert(student)
        logger.info(f"Student account created: {student.id} ({student.roll_number})")
        return student

    def get(self, student_id: str) -> Student:
        student = self.students.get(student_id)
        if student is None:
            raise NotFoundError("Student")
        return student

    def list(self, verified: Optional[bool] = None) -> List[StudentListItem]:
        """Students newest first, each with how many ratings they submitted."""
        return [
            StudentListItem(**StudentOut.model_validate(student).model_dump(), ratings_count=count)
            for student, count in self.students.list_with_ratings_count(verified)
        ]

    def verify(self, student_id: str) -> Student:
        student = self.get(student_id)
        if student.is_verified:
            raise ValidationError("Student is already verified")
        student = self.students.update(student, {"is_verified": True})
        logger.info(f"Student {student_id} verified")
        return student

    def toggle_status(self, student_id: str) -> Student:
        student = self.get(student_id)
        student = self.students.update(student, {"is_active": not student.is_active})
        logger.info(f"Student {student_id} {'activated' if student.is_active else 'deactivated'}")
        return student

    def delete(self, student_id: str) -> None:
        """Delete a student together with their ratings, complaints, attendance and read receipts."""
        student = self.get(student_id)
        self.students.delete(student)
