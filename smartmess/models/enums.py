"""
Enumerations shared by models, schemas and services.

Values are the exact strings stored in the database and sent over the wire.
"""

from enum import Enum


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACKS = "snacks"
    DINNER = "dinner"


class ComplaintCategory(str, Enum):
    FOOD_QUALITY = "food_quality"
    HYGIENE = "hygiene"
    SERVICE = "service"
    QUANTITY = "quantity"
    OTHER = "other"


class ComplaintPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ComplaintStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


# Reported for a meal slot that has no attendance row
NOT_MARKED = "not-marked"


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    URGENT = "urgent"


class AdminRole(str, Enum):
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class PrincipalKind(str, Enum):
    """Closed set of identities a token can carry."""

    STUDENT = "student"
    ADMIN = "admin"
