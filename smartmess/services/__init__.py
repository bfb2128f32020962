"""
Domain services. Each takes the request's database session and raises
`SmartMessError` subclasses on failure.
"""

from smartmess.services.attendance_service import AttendanceService
from smartmess.services.auth_service import AuthService, Principal
from smartmess.services.complaint_service import ComplaintService
from smartmess.services.dashboard_service import DashboardService
from smartmess.services.menu_service import MenuService
from smartmess.services.notification_service import NotificationService
from smartmess.services.rating_service import RatingService
from smartmess.services.student_service import StudentService

__all__ = [
    "AuthService",
    "Principal",
    "StudentService",
    "MenuService",
    "RatingService",
    "AttendanceService",
    "ComplaintService",
    "NotificationService",
    "DashboardService",
]
