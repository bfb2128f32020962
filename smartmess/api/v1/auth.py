"""
Authentication endpoints: registration, student and admin login, profile.
"""

from typing import Union

from fastapi import APIRouter, Depends, status

from smartmess.api.deps import get_auth_service, get_current_principal
from smartmess.models import Student
from smartmess.schemas.auth import LoginRequest, LoginResponse, RegisterRequest
from smartmess.schemas.common import MessageResponse, SuccessResponse
from smartmess.schemas.student import AdminOut, StudentOut
from smartmess.services import AuthService, Principal

router = APIRouter(prefix="/auth", tags=["Authentication"])

AccountOut = Union[StudentOut, AdminOut]


def account_out(principal: Principal) -> AccountOut:
    """Public summary of a student or administrator account."""
    if isinstance(principal, Student):
        return StudentOut.model_validate(principal)
    return AdminOut.model_validate(principal)


@router.post(
    "/register",
    response_model=SuccessResponse[StudentOut],
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a student. The account must be approved by an admin before login."""
    student = auth_service.register(payload)
    return SuccessResponse.create(
        data=StudentOut.model_validate(student),
        message="Registration successful. Your account is pending admin approval.",
    )


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    issued, student = auth_service.login_student(payload.email, payload.password)
    return LoginResponse(
        token=issued.token,
        expires_at=issued.expires_at,
        user=StudentOut.model_validate(student),
    )


@router.post("/admin/login", response_model=LoginResponse)
def admin_login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    issued, admin = auth_service.login_admin(payload.email, payload.password)
    return LoginResponse(
        message="Admin login successful",
        token=issued.token,
        expires_at=issued.expires_at,
        user=AdminOut.model_validate(admin),
    )


@router.get("/me", response_model=SuccessResponse[AccountOut])
def me(principal: Principal = Depends(get_current_principal)):
    return SuccessResponse.create(data=account_out(principal))


@router.get("/profile", response_model=SuccessResponse[AccountOut])
def profile(principal: Principal = Depends(get_current_principal)):
    return SuccessResponse.create(data=account_out(principal))


@router.post("/logout", response_model=MessageResponse)
def logout():
    """Tokens are discarded by the client; there is no server-side session."""
    return MessageResponse.create("Logged out successfully")
