"""
FastAPI dependencies

Database sessions, security primitives, the authenticated principal and
its authorization gates, and per-request service construction.
"""

from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from smartmess.config.settings import Settings
from smartmess.core.exceptions import AuthorizationError, InvalidTokenError
from smartmess.core.security import JWTManager, PasswordHasher
from smartmess.db.database import Database
from smartmess.models import Admin, Student
from smartmess.services import (
    AttendanceService,
    AuthService,
    ComplaintService,
    DashboardService,
    MenuService,
    NotificationService,
    Principal,
    RatingService,
    StudentService,
)

# Missing credentials are reported by get_current_principal, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """
    Yield one database session per request and always close it.

    Usage in endpoints:
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = database.new_session()
    try:
        yield db
    finally:
        db.close()


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_jwt_manager(request: Request) -> JWTManager:
    return request.app.state.jwt_manager


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> AuthService:
    return AuthService(db, settings, hasher, jwt_manager)


# Authentication dependencies
def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Principal:
    """
    Resolve the bearer token to the current student or administrator.
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("No token provided")
    return auth_service.authenticate(credentials.credentials)


def require_student(principal: Principal = Depends(get_current_principal)) -> Student:
    if not isinstance(principal, Student):
        raise AuthorizationError("Access denied. Student account required.")
    return principal


def require_admin(principal: Principal = Depends(get_current_principal)) -> Admin:
    if not isinstance(principal, Admin):
        raise AuthorizationError()
    return principal


def require_superadmin(admin: Admin = Depends(require_admin)) -> Admin:
    if not admin.is_superadmin:
        raise AuthorizationError("Access denied. Superadmin privileges required.")
    return admin


# Service dependencies
def get_student_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> StudentService:
    return StudentService(db, settings, hasher)


def get_menu_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> MenuService:
    return MenuService(db, settings)


def get_rating_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> RatingService:
    return RatingService(db, settings)


def get_attendance_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> AttendanceService:
    return AttendanceService(db, settings)


def get_complaint_service(db: Session = Depends(get_db)) -> ComplaintService:
    return ComplaintService(db)


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def get_dashboard_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> DashboardService:
    return DashboardService(db, settings)
