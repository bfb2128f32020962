"""
Data access layer: one repository per table.
"""

from smartmess.repositories.account_repository import AdminRepository, StudentRepository
from smartmess.repositories.attendance_repository import AttendanceRepository
from smartmess.repositories.base_repository import BaseRepository
from smartmess.repositories.complaint_repository import ComplaintRepository
from smartmess.repositories.menu_repository import MenuRepository
from smartmess.repositories.notification_repository import NotificationReadRepository, NotificationRepository
from smartmess.repositories.rating_repository import RatingRepository

__all__ = [
    "BaseRepository",
    "StudentRepository",
    "AdminRepository",
    "MenuRepository",
    "RatingRepository",
    "ComplaintRepository",
    "AttendanceRepository",
    "NotificationRepository",
    "NotificationReadRepository",
]
