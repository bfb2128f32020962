"""
Student self-service endpoints. Every route acts on the authenticated
student; none accepts a student id from the client.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from smartmess.api.deps import (
    get_attendance_service,
    get_complaint_service,
    get_menu_service,
    get_notification_service,
    get_rating_service,
    require_student,
)
from smartmess.models import Student
from smartmess.schemas.attendance import AttendanceMark, AttendanceOut, TodayAttendanceOut
from smartmess.schemas.common import MessageResponse, SuccessResponse
from smartmess.schemas.complaint import ComplaintCreate, ComplaintOut
from smartmess.schemas.menu import MenuOut
from smartmess.schemas.notification import StudentNotificationOut, UnreadCountOut
from smartmess.schemas.rating import RatingOut, RatingSubmit
from smartmess.services import (
    AttendanceService,
    ComplaintService,
    MenuService,
    NotificationService,
    RatingService,
)

router = APIRouter(prefix="/student", tags=["Student"])


# Menus

@router.get("/menu/today", response_model=SuccessResponse[Optional[MenuOut]])
def todays_menu(
    student: Student = Depends(require_student),
    menu_service: MenuService = Depends(get_menu_service),
):
    menu = menu_service.today()
    return SuccessResponse.create(
        data=MenuOut.model_validate(menu) if menu else None,
        message=None if menu else "No menu available for today",
    )


@router.get("/menu/weekly", response_model=SuccessResponse[List[MenuOut]])
def weekly_menu(
    student: Student = Depends(require_student),
    menu_service: MenuService = Depends(get_menu_service),
):
    return SuccessResponse.create(data=[MenuOut.model_validate(m) for m in menu_service.weekly()])


@router.get("/menu", response_model=SuccessResponse[Optional[MenuOut]])
def menu_by_date(
    menu_date: Optional[str] = Query(None, alias="date"),
    student: Student = Depends(require_student),
    menu_service: MenuService = Depends(get_menu_service),
):
    """Menu for ``?date=YYYY-MM-DD``, or today's when no date is given."""
    menu = menu_service.by_date(menu_date) if menu_date else menu_service.today()
    return SuccessResponse.create(
        data=MenuOut.model_validate(menu) if menu else None,
        message=None if menu else "No menu available for this date",
    )


# Ratings and complaints

@router.post("/rating", response_model=SuccessResponse[RatingOut])
def submit_rating(
    payload: RatingSubmit,
    response: Response,
    student: Student = Depends(require_student),
    rating_service: RatingService = Depends(get_rating_service),
):
    rating, created = rating_service.submit(student.id, payload)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return SuccessResponse.create(
        data=RatingOut.model_validate(rating),
        message="Rating submitted successfully" if created else "Rating updated successfully",
    )


@router.post("/complaint", response_model=SuccessResponse[ComplaintOut], status_code=status.HTTP_201_CREATED)
def submit_complaint(
    payload: ComplaintCreate,
    student: Student = Depends(require_student),
    complaint_service: ComplaintService = Depends(get_complaint_service),
):
    complaint = complaint_service.submit(student.id, payload)
    return SuccessResponse.create(
        data=ComplaintOut.model_validate(complaint),
        message="Complaint submitted successfully",
    )


@router.get("/complaints", response_model=SuccessResponse[List[ComplaintOut]])
def my_complaints(
    student: Student = Depends(require_student),
    complaint_service: ComplaintService = Depends(get_complaint_service),
):
    complaints = complaint_service.list_mine(student.id)
    return SuccessResponse.create(data=[ComplaintOut.model_validate(c) for c in complaints])


# Attendance

@router.post("/attendance", response_model=SuccessResponse[AttendanceOut])
def mark_attendance(
    payload: AttendanceMark,
    student: Student = Depends(require_student),
    attendance_service: AttendanceService = Depends(get_attendance_service),
):
    record, _ = attendance_service.mark(student.id, payload)
    return SuccessResponse.create(
        data=AttendanceOut.model_validate(record),
        message=f"Attendance marked as {payload.status.value} for {payload.meal_type.value}",
    )


@router.get("/attendance/today", response_model=SuccessResponse[TodayAttendanceOut])
def todays_attendance(
    student: Student = Depends(require_student),
    attendance_service: AttendanceService = Depends(get_attendance_service),
):
    return SuccessResponse.create(data=attendance_service.today_status(student.id))


@router.get("/attendance", response_model=SuccessResponse[List[AttendanceOut]])
def attendance_history(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    student: Student = Depends(require_student),
    attendance_service: AttendanceService = Depends(get_attendance_service),
):
    records = attendance_service.history(student.id, start_date, end_date)
    return SuccessResponse.create(data=[AttendanceOut.model_validate(r) for r in records])


# Notifications

@router.get("/notifications", response_model=SuccessResponse[List[StudentNotificationOut]])
def notifications(
    student: Student = Depends(require_student),
    notification_service: NotificationService = Depends(get_notification_service),
):
    return SuccessResponse.create(data=notification_service.list_for_student(student.id))


@router.get("/notifications/unread-count", response_model=SuccessResponse[UnreadCountOut])
def unread_count(
    student: Student = Depends(require_student),
    notification_service: NotificationService = Depends(get_notification_service),
):
    return SuccessResponse.create(data=notification_service.unread_count(student.id))


@router.put("/notifications/{notification_id}/read", response_model=MessageResponse)
def mark_notification_read(
    notification_id: str,
    student: Student = Depends(require_student),
    notification_service: NotificationService = Depends(get_notification_service),
):
    notification_service.mark_read(student.id, notification_id)
    return MessageResponse.create("Notification marked as read")
