"""
Administrator endpoints: dashboard, students, menus, ratings, complaints,
notifications and attendance.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from smartmess.api.deps import (
    get_attendance_service,
    get_complaint_service,
    get_dashboard_service,
    get_menu_service,
    get_notification_service,
    get_rating_service,
    get_student_service,
    require_admin,
    require_superadmin,
)
from smartmess.models import Admin
from smartmess.models.enums import ComplaintStatus, MealType
from smartmess.schemas.attendance import AdminAttendanceMark, AttendanceDayStats, AttendanceOut, DailyAttendanceOut
from smartmess.schemas.common import MessageResponse, SuccessResponse
from smartmess.schemas.complaint import AdminComplaintOut, ComplaintOut, ComplaintStatusUpdate
from smartmess.schemas.dashboard import DashboardStats
from smartmess.schemas.menu import MenuOut, MenuUpdate, MenuUpsert
from smartmess.schemas.notification import NotificationCreate, NotificationOut
from smartmess.schemas.rating import MealRatingStats, RatingDetailOut
from smartmess.schemas.student import StudentCreate, StudentListItem, StudentOut
from smartmess.services import (
    AttendanceService,
    ComplaintService,
    DashboardService,
    MenuService,
    NotificationService,
    RatingService,
    StudentService,
)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=SuccessResponse[DashboardStats])
def dashboard_stats(dashboard_service: DashboardService = Depends(get_dashboard_service)):
    return SuccessResponse.create(data=dashboard_service.stats())


# ==================== Students ====================

@router.post("/students", response_model=SuccessResponse[StudentOut], status_code=status.HTTP_201_CREATED)
def add_student(
    payload: StudentCreate,
    student_service: StudentService = Depends(get_student_service),
):
    """Create a student account; it still has to be verified."""
    student = student_service.create(payload)
    return SuccessResponse.create(data=StudentOut.model_validate(student), message="Student added successfully")


@router.get("/students", response_model=SuccessResponse[List[StudentListItem]])
def list_students(
    verified: Optional[bool] = Query(None),
    student_service: StudentService = Depends(get_student_service),
):
    return SuccessResponse.create(data=student_service.list(verified))


@router.put("/students/{student_id}/verify", response_model=SuccessResponse[StudentOut])
def verify_student(
    student_id: str,
    student_service: StudentService = Depends(get_student_service),
):
    student = student_service.verify(student_id)
    return SuccessResponse.create(data=StudentOut.model_validate(student), message="Student verified successfully")


@router.put("/students/{student_id}/toggle-status", response_model=SuccessResponse[StudentOut])
def toggle_student_status(
    student_id: str,
    student_service: StudentService = Depends(get_student_service),
):
    student = student_service.toggle_status(student_id)
    state = "activated" if student.is_active else "deactivated"
    return SuccessResponse.create(data=StudentOut.model_validate(student), message=f"Student {state} successfully")


@router.delete("/students/{student_id}", response_model=MessageResponse)
def delete_student(
    student_id: str,
    superadmin: Admin = Depends(require_superadmin),
    student_service: StudentService = Depends(get_student_service),
):
    student_service.delete(student_id)
    return MessageResponse.create("Student deleted successfully")


# ==================== Menus ====================

@router.post("/menu", response_model=SuccessResponse[MenuOut])
def upsert_menu(
    payload: MenuUpsert,
    response: Response,
    admin: Admin = Depends(require_admin),
    menu_service: MenuService = Depends(get_menu_service),
):
    menu, created = menu_service.upsert(payload, admin.id)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return SuccessResponse.create(
        data=MenuOut.model_validate(menu),
        message="Menu created successfully" if created else "Menu updated successfully",
    )


@router.put("/menu/{menu_id}", response_model=SuccessResponse[MenuOut])
def update_menu(
    menu_id: str,
    payload: MenuUpdate,
    admin: Admin = Depends(require_admin),
    menu_service: MenuService = Depends(get_menu_service),
):
    menu = menu_service.update(menu_id, payload, admin.id)
    return SuccessResponse.create(data=MenuOut.model_validate(menu), message="Menu updated successfully")


@router.delete("/menu/{menu_id}", response_model=MessageResponse)
def delete_menu(
    menu_id: str,
    menu_service: MenuService = Depends(get_menu_service),
):
    menu_service.delete(menu_id)
    return MessageResponse.create("Menu deleted successfully")


# ==================== Ratings ====================

@router.get("/ratings", response_model=SuccessResponse[List[RatingDetailOut]])
def list_ratings(
    meal_type: Optional[MealType] = Query(None, alias="mealType"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    limit: int = Query(50, ge=1, le=500),
    rating_service: RatingService = Depends(get_rating_service),
):
    ratings = rating_service.list_detailed(meal_type, start_date, end_date, limit)
    return SuccessResponse.create(data=ratings)


@router.get("/ratings/stats", response_model=SuccessResponse[List[MealRatingStats]])
def rating_stats(rating_service: RatingService = Depends(get_rating_service)):
    return SuccessResponse.create(data=rating_service.analytics())


# ==================== Complaints ====================

@router.get("/complaints", response_model=SuccessResponse[List[AdminComplaintOut]])
def list_complaints(
    complaint_status: Optional[ComplaintStatus] = Query(None, alias="status"),
    complaint_service: ComplaintService = Depends(get_complaint_service),
):
    complaints = complaint_service.list_all(complaint_status)
    return SuccessResponse.create(data=[AdminComplaintOut.model_validate(c) for c in complaints])


@router.put("/complaints/{complaint_id}", response_model=SuccessResponse[ComplaintOut])
def update_complaint_status(
    complaint_id: str,
    payload: ComplaintStatusUpdate,
    admin: Admin = Depends(require_admin),
    complaint_service: ComplaintService = Depends(get_complaint_service),
):
    complaint = complaint_service.update_status(complaint_id, payload, admin.id)
    return SuccessResponse.create(data=ComplaintOut.model_validate(complaint), message="Complaint updated successfully")


# ==================== Notifications ====================

@router.post("/notifications", response_model=SuccessResponse[NotificationOut], status_code=status.HTTP_201_CREATED)
def send_notification(
    payload: NotificationCreate,
    admin: Admin = Depends(require_admin),
    notification_service: NotificationService = Depends(get_notification_service),
):
    notification = notification_service.broadcast(payload, admin.id)
    return SuccessResponse.create(
        data=NotificationOut.model_validate(notification),
        message="Notification sent successfully",
    )


@router.get("/notifications", response_model=SuccessResponse[List[NotificationOut]])
def list_notifications(notification_service: NotificationService = Depends(get_notification_service)):
    notifications = notification_service.list_all()
    return SuccessResponse.create(data=[NotificationOut.model_validate(n) for n in notifications])


@router.delete("/notifications/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: str,
    notification_service: NotificationService = Depends(get_notification_service),
):
    notification_service.delete(notification_id)
    return MessageResponse.create("Notification deleted successfully")


# ==================== Attendance ====================

@router.get("/attendance", response_model=SuccessResponse[DailyAttendanceOut])
def daily_attendance(
    attendance_date: Optional[date] = Query(None, alias="date"),
    meal_type: Optional[MealType] = Query(None, alias="mealType"),
    attendance_service: AttendanceService = Depends(get_attendance_service),
):
    return SuccessResponse.create(data=attendance_service.daily(attendance_date, meal_type))


@router.post("/attendance", response_model=SuccessResponse[AttendanceOut])
def mark_attendance(
    payload: AdminAttendanceMark,
    admin: Admin = Depends(require_admin),
    attendance_service: AttendanceService = Depends(get_attendance_service),
):
    record, _ = attendance_service.mark(payload.student_id, payload, marked_by=admin.id)
    return SuccessResponse.create(
        data=AttendanceOut.model_validate(record),
        message=f"Attendance marked as {payload.status.value} for {payload.meal_type.value}",
    )


@router.get("/attendance/stats", response_model=SuccessResponse[List[AttendanceDayStats]])
def attendance_stats(attendance_service: AttendanceService = Depends(get_attendance_service)):
    return SuccessResponse.create(data=attendance_service.weekly_stats())
