"""
Repositories for student and administrator accounts.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from smartmess.models import Admin, Rating, Student
from smartmess.repositories.base_repository import BaseRepository


class StudentRepository(BaseRepository[Student]):
    """Student accounts; emails are stored lowercased."""

    conflict_message = "Student with this email or roll number already exists"

    def __init__(self, db: Session):
        super().__init__(Student, db)

    def get_by_email(self, email: str) -> Optional[Student]:
        return self.find_one(email=email.strip().lower())

    def list_with_ratings_count(self, verified: Optional[bool] = None) -> List[Tuple[Student, int]]:
        """
        List students newest first, each with the number of ratings they gave.

        Args:
            verified: Restrict to verified (True) or pending (False) students
        """
        ratings_count = (
            select(Rating.student_id, func.count(Rating.id).label("ratings_count"))
            .group_by(Rating.student_id)
            .subquery()
        )
        stmt = (
            select(Student, func.coalesce(ratings_count.c.ratings_count, 0))
            .outerjoin(ratings_count, ratings_count.c.student_id == Student.id)
            .order_by(Student.created_at.desc())
        )
        if verified is not None:
            stmt = stmt.where(Student.is_verified.is_(verified))

        with self._translate_errors("List"):
            return [(student, int(count)) for student, count in self.db.execute(stmt).all()]

    def list_eligible(self) -> List[Student]:
        """Students who may eat in the mess: verified and active."""
        return self.list(
            Student.is_verified.is_(True),
            Student.is_active.is_(True),
            order_by=[Student.roll_number],
        )

    def count_eligible(self) -> int:
        return self.count(Student.is_verified.is_(True), Student.is_active.is_(True))


class AdminRepository(BaseRepository[Admin]):
    conflict_message = "Admin with this email already exists"

    def __init__(self, db: Session):
        super().__init__(Admin, db)

    def get_by_email(self, email: str) -> Optional[Admin]:
        return self.find_one(email=email.strip().lower())
