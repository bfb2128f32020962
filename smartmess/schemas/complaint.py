"""
Complaint schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from smartmess.models.enums import ComplaintCategory, ComplaintPriority, ComplaintStatus
from smartmess.schemas.common import BaseSchema
from smartmess.schemas.student import StudentBrief

__all__ = ["ComplaintCreate", "ComplaintStatusUpdate", "ComplaintOut", "AdminComplaintOut"]


class ComplaintCreate(BaseSchema):
    """
    A student's complaint. Any status supplied by the caller is ignored;
    new complaints always start as pending.
    """

    category: ComplaintCategory
    subject: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)
    priority: ComplaintPriority = ComplaintPriority.MEDIUM


class ComplaintStatusUpdate(BaseSchema):
    status: ComplaintStatus
    admin_response: Optional[str] = Field(default=None, max_length=1000)


class ComplaintOut(BaseSchema):
    id: str
    student_id: str
    category: ComplaintCategory
    subject: str
    description: str
    priority: ComplaintPriority
    status: ComplaintStatus
    admin_response: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AdminComplaintOut(ComplaintOut):
    student: StudentBrief
