"""
Notification schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from smartmess.models.enums import NotificationType
from smartmess.schemas.common import BaseSchema

__all__ = ["NotificationCreate", "NotificationOut", "StudentNotificationOut", "UnreadCountOut"]


class NotificationCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)
    type: NotificationType = NotificationType.INFO


class NotificationOut(BaseSchema):
    id: str
    title: str
    message: str
    type: NotificationType
    target_audience: str
    is_active: bool
    created_by: Optional[str] = None
    created_at: datetime


class StudentNotificationOut(NotificationOut):
    is_read: bool = False


class UnreadCountOut(BaseSchema):
    total: int
    read: int
    unread: int
