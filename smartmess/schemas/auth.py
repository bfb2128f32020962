"""
Authentication request and response schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Union

from pydantic import EmailStr, StringConstraints, field_validator

from smartmess.schemas.common import BaseSchema
from smartmess.schemas.student import AdminOut, StudentCreate, StudentOut

__all__ = ["RegisterRequest", "LoginRequest", "LoginResponse"]


class RegisterRequest(StudentCreate):
    pass


class LoginRequest(BaseSchema):
    email: EmailStr
    password: Annotated[str, StringConstraints(strip_whitespace=False, min_length=1)]

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginResponse(BaseSchema):
    """Successful login: bearer token, its expiry and the account."""

    success: bool = True
    message: str = "Login successful"
    token: str
    expires_at: datetime
    user: Union[StudentOut, AdminOut]
