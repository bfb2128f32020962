"""
Meal attendance service.

Students mark whether they will eat each meal; the mess office reads the
per-day forecast. Every date default comes from `local_today`.
"""

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from smartmess.config.settings import Settings
from smartmess.core.exceptions import NotFoundError
from smartmess.models import MealAttendance
from smartmess.models.enums import NOT_MARKED, AttendanceStatus, MealType
from smartmess.repositories import AttendanceRepository, StudentRepository
from smartmess.schemas.attendance import (
    AttendanceDayStats,
    AttendanceMark,
    DailyAttendanceOut,
    MealAttendanceStats,
    StudentAttendanceRow,
    TodayAttendanceOut,
)
from smartmess.utils.date_utils import local_today, short_day_name, trailing_days

logger = logging.getLogger(__name__)

STATS_DAYS = 7


class AttendanceService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.attendance = AttendanceRepository(db)
        self.students = StudentRepository(db)

    def today(self) -> date:
        return local_today(self.settings.TIMEZONE)

    def mark(
        self,
        student_id: str,
        data: AttendanceMark,
        marked_by: Optional[str] = None,
    ) -> Tuple[MealAttendance, bool]:
        """
        Record a student's status for one meal, replacing an earlier mark.

        Args:
            student_id: Student the mark applies to
            data: Meal type, status and optional date (defaults to today)
            marked_by: Admin id when the office marks on the student's behalf

        Raises:
            NotFoundError: If the student does not exist
        """
        if marked_by is not None and self.students.get(student_id) is None:
            raise NotFoundError("Student")

        attendance_date = data.attendance_date or self.today()
        record, created = self.attendance.mark(
            student_id=student_id,
            attendance_date=attendance_date,
            meal_type=data.meal_type,
            status=data.status,
            marked_by=marked_by,
        )
        logger.debug(f"Attendance {student_id} {attendance_date} {data.meal_type.value} -> {data.status.value}")
        return record, created

    def today_status(self, student_id: str) -> TodayAttendanceOut:
        """Status of each meal today; unmarked meals read ``not-marked``."""
        today = self.today()
        marked = {
            MealType(row.meal_type): AttendanceStatus(row.status).value
            for row in self.attendance.list_for_student_on(student_id, today)
        }
        return TodayAttendanceOut(
            attendance_date=today,
            attendance={meal.value: marked.get(meal, NOT_MARKED) for meal in MealType},
        )

    def history(
        self,
        student_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MealAttendance]:
        return self.attendance.history(student_id, start_date, end_date)

    def daily(self, attendance_date: Optional[date] = None, meal_type: Optional[MealType] = None) -> DailyAttendanceOut:
        """
        Attendance forecast for one date across verified, active students.

        Students without a row count as not marked. The attendance rate is
        present / eligible students * 100, one decimal, and 0 when nobody is
        eligible.
        """
        attendance_date = attendance_date or self.today()
        meals = [meal_type] if meal_type else list(MealType)
        students = self.students.list_eligible()

        status_by_key: Dict[Tuple[str, MealType], str] = {
            (row.student_id, MealType(row.meal_type)): AttendanceStatus(row.status).value
            for row in self.attendance.list_on(attendance_date, meal_type)
        }

        rows = []
        for student in students:
            rows.append(
                StudentAttendanceRow(
                    id=student.id,
                    name=student.name,
                    roll_number=student.roll_number,
                    hostel_name=student.hostel_name,
                    room_number=student.room_number,
                    attendance={
                        meal.value: status_by_key.get((student.id, meal), NOT_MARKED) for meal in meals
                    },
                )
            )

        total = len(students)
        stats = {}
        for meal in meals:
            statuses = [row.attendance[meal.value] for row in rows]
            present = statuses.count(AttendanceStatus.PRESENT.value)
            absent = statuses.count(AttendanceStatus.ABSENT.value)
            stats[meal.value] = MealAttendanceStats(
                present=present,
                absent=absent,
                not_marked=total - present - absent,
                attendance_rate=round(present / total * 100, 1) if total else 0.0,
            )

        return DailyAttendanceOut(
            attendance_date=attendance_date,
            total_students=total,
            stats=stats,
            students=rows,
        )

    def weekly_stats(self) -> List[AttendanceDayStats]:
        """Present count per meal for each of the last seven days, oldest first."""
        days = trailing_days(self.today(), STATS_DAYS)
        counts = self.attendance.present_counts_between(days[0], days[-1])
        total = self.students.count_eligible()

        return [
            AttendanceDayStats(
                attendance_date=day,
                day_name=short_day_name(day),
                total_students=total,
                **{meal.value: counts.get((day, meal), 0) for meal in MealType},
            )
            for day in days
        ]
