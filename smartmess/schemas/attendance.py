"""
Meal attendance schemas.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import AliasChoices, Field

from smartmess.models.enums import AttendanceStatus, MealType
from smartmess.schemas.common import BaseSchema

__all__ = [
    "AttendanceMark",
    "AdminAttendanceMark",
    "AttendanceOut",
    "TodayAttendanceOut",
    "MealAttendanceStats",
    "StudentAttendanceRow",
    "DailyAttendanceOut",
    "AttendanceDayStats",
]


class AttendanceMark(BaseSchema):
    """Mark a meal slot; the date defaults to today."""

    meal_type: MealType
    status: AttendanceStatus
    attendance_date: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("date", "attendance_date", "attendanceDate")
    )


class AdminAttendanceMark(AttendanceMark):
    student_id: str = Field(..., min_length=1)


class AttendanceOut(BaseSchema):
    id: str
    student_id: str
    attendance_date: date = Field(
        validation_alias=AliasChoices("attendance_date", "date"),
        serialization_alias="date",
    )
    meal_type: MealType
    status: AttendanceStatus
    marked_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TodayAttendanceOut(BaseSchema):
    """Status per meal slot; unmarked slots read ``not-marked``."""

    attendance_date: date = Field(
        validation_alias=AliasChoices("attendance_date", "date"),
        serialization_alias="date",
    )
    attendance: Dict[str, str]


class MealAttendanceStats(BaseSchema):
    present: int
    absent: int
    not_marked: int
    attendance_rate: float


class StudentAttendanceRow(BaseSchema):
    id: str
    name: str
    roll_number: str
    hostel_name: str
    room_number: str
    attendance: Dict[str, str]


class DailyAttendanceOut(BaseSchema):
    """Attendance forecast for one date across all eligible students."""

    attendance_date: date = Field(
        validation_alias=AliasChoices("attendance_date", "date"),
        serialization_alias="date",
    )
    total_students: int
    stats: Dict[str, MealAttendanceStats]
    students: List[StudentAttendanceRow]


class AttendanceDayStats(BaseSchema):
    attendance_date: date = Field(
        validation_alias=AliasChoices("attendance_date", "date"),
        serialization_alias="date",
    )
    day_name: str
    total_students: int
    breakfast: int
    lunch: int
    snacks: int
    dinner: int
