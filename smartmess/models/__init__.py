"""
SQLAlchemy models for the SmartMess service.

Importing this package registers every table on ``Base.metadata``.
"""

from smartmess.models.account import Admin, Student
from smartmess.models.attendance import MealAttendance
from smartmess.models.base import Base, BaseModel
from smartmess.models.complaint import Complaint
from smartmess.models.menu import DEFAULT_MEAL_TIMINGS, Menu
from smartmess.models.notification import Notification, NotificationRead
from smartmess.models.rating import Rating

__all__ = [
    "Base",
    "BaseModel",
    "Student",
    "Admin",
    "Menu",
    "DEFAULT_MEAL_TIMINGS",
    "Rating",
    "Complaint",
    "MealAttendance",
    "Notification",
    "NotificationRead",
]
