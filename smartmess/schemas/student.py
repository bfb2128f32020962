"""
Student and administrator account schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import EmailStr, Field, StringConstraints, field_validator

from smartmess.models.enums import AdminRole
from smartmess.schemas.common import BaseSchema

__all__ = [
    "StudentCreate",
    "StudentOut",
    "StudentListItem",
    "StudentBrief",
    "AdminCreate",
    "AdminOut",
]

# bcrypt only reads the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72

# Secrets are kept exactly as typed, surrounding spaces included
Password = Annotated[str, StringConstraints(strip_whitespace=False, min_length=1, max_length=128)]


def check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


class StudentCreate(BaseSchema):
    """Fields for self-registration and for students added by an admin."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: Password
    roll_number: str = Field(..., min_length=1, max_length=50)
    hostel_name: str = Field(..., min_length=1, max_length=100)
    room_number: str = Field(..., min_length=1, max_length=20)
    phone_number: str = Field(..., min_length=1, max_length=20)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, v: str) -> str:
        return check_password_bytes(v)


class StudentBrief(BaseSchema):
    id: str
    name: str
    email: str
    roll_number: str
    hostel_name: str
    room_number: str


class StudentOut(StudentBrief):
    """Student account summary; never includes the password hash."""

    phone_number: str
    is_verified: bool
    is_active: bool
    role: Literal["student"] = "student"
    created_at: datetime


class StudentListItem(StudentOut):
    ratings_count: int = 0


class AdminCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: Password
    role: AdminRole = AdminRole.SUPERADMIN

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, v: str) -> str:
        return check_password_bytes(v)


class AdminOut(BaseSchema):
    id: str
    name: str
    email: str
    role: AdminRole
    created_at: Optional[datetime] = None
