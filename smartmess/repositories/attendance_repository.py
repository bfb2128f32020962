"""
Meal attendance repository.
"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from smartmess.models import MealAttendance
from smartmess.models.enums import AttendanceStatus, MealType
from smartmess.repositories.base_repository import BaseRepository


class AttendanceRepository(BaseRepository[MealAttendance]):
    def __init__(self, db: Session):
        super().__init__(MealAttendance, db)

    def mark(
        self,
        student_id: str,
        attendance_date: date,
        meal_type: MealType,
        status: AttendanceStatus,
        marked_by: Optional[str] = None,
    ) -> Tuple[MealAttendance, bool]:
        """Record the status for one meal slot, overwriting an earlier mark."""
        return self.upsert(
            {
                "student_id": student_id,
                "attendance_date": attendance_date,
                "meal_type": meal_type,
                "status": status,
                "marked_by": marked_by,
            },
            conflict_columns=["student_id", "attendance_date", "meal_type"],
            update_columns=["status", "marked_by"],
        )

    def list_for_student_on(self, student_id: str, attendance_date: date) -> List[MealAttendance]:
        return self.list(student_id=student_id, attendance_date=attendance_date)

    def history(
        self,
        student_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[MealAttendance]:
        """The student's rows within the inclusive range, newest first."""
        criteria = [MealAttendance.student_id == student_id]
        if start is not None:
            criteria.append(MealAttendance.attendance_date >= start)
        if end is not None:
            criteria.append(MealAttendance.attendance_date <= end)
        return self.list(
            *criteria,
            order_by=[MealAttendance.attendance_date.desc(), MealAttendance.updated_at.desc()],
        )

    def list_on(self, attendance_date: date, meal_type: Optional[MealType] = None) -> List[MealAttendance]:
        criteria = [MealAttendance.attendance_date == attendance_date]
        if meal_type is not None:
            criteria.append(MealAttendance.meal_type == meal_type)
        return self.list(*criteria)

    def present_counts_between(self, start: date, end: date) -> Dict[Tuple[date, MealType], int]:
        """Number of ``present`` rows per (date, meal type) in [start, end]."""
        stmt = (
            select(MealAttendance.attendance_date, MealAttendance.meal_type, func.count(MealAttendance.id))
            .where(
                MealAttendance.attendance_date >= start,
                MealAttendance.attendance_date <= end,
                MealAttendance.status == AttendanceStatus.PRESENT,
            )
            .group_by(MealAttendance.attendance_date, MealAttendance.meal_type)
        )
        with self._translate_errors("Aggregate"):
            return {
                (row_date, MealType(meal_type)): int(count)
                for row_date, meal_type, count in self.db.execute(stmt).all()
            }
