"""
Authentication service: registration, login and bearer-token resolution.
"""

import logging
from typing import Tuple, Union

from sqlalchemy.orm import Session

from smartmess.config.settings import Settings
from smartmess.core.exceptions import (
    AccountDisabledError,
    InvalidCredentialsError,
    InvalidTokenError,
    PendingApprovalError,
)
from smartmess.core.security import IssuedToken, JWTManager, PasswordHasher
from smartmess.models import Admin, Student
from smartmess.models.enums import PrincipalKind
from smartmess.repositories import AdminRepository, StudentRepository
from smartmess.schemas.student import StudentCreate
from smartmess.services.student_service import StudentService

logger = logging.getLogger(__name__)

Principal = Union[Student, Admin]


class AuthService:
    """
    Turns credentials into tokens and tokens back into accounts.

    Student and administrator logins are looked up in their own tables, so
    a student email never authenticates against the admin endpoint.
    """

    def __init__(
        self,
        db: Session,
        settings: Settings,
        hasher: PasswordHasher,
        jwt_manager: JWTManager,
    ):
        self.db = db
        self.settings = settings
        self.hasher = hasher
        self.jwt = jwt_manager
        self.students = StudentRepository(db)
        self.admins = AdminRepository(db)

    def register(self, data: StudentCreate) -> Student:
        """
        Register a student. The account waits for admin approval and no
        token is issued.
        """
        return StudentService(self.db, self.settings, self.hasher).create(data)

    def login_student(self, email: str, password: str) -> Tuple[IssuedToken, Student]:
        """
        Authenticate a student.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            PendingApprovalError: Account not yet verified by an admin
            AccountDisabledError: Account deactivated by an admin
        """
        student = self.students.get_by_email(email)
        if student is None or not self.hasher.verify(password, student.password_hash):
            logger.info("Student login failed: bad credentials")
            raise InvalidCredentialsError()

        self._ensure_student_allowed(student)

        issued = self.jwt.issue_token(student.id, PrincipalKind.STUDENT, student.email)
        logger.info(f"Student {student.id} logged in")
        return issued, student

    def login_admin(self, email: str, password: str) -> Tuple[IssuedToken, Admin]:
        admin = self.admins.get_by_email(email)
        if admin is None or not self.hasher.verify(password, admin.password_hash):
            logger.info("Admin login failed: bad credentials")
            raise InvalidCredentialsError()

        issued = self.jwt.issue_token(admin.id, PrincipalKind.ADMIN, admin.email)
        logger.info(f"Admin {admin.id} logged in")
        return issued, admin

    def authenticate(self, token: str) -> Principal:
        """
        Resolve a bearer token to the current account.

        The account is re-read on every request so verification, suspension
        and deletion take effect before the token expires.

        Raises:
            InvalidTokenError: Bad token or the account no longer exists
            PendingApprovalError / AccountDisabledError: Student lost access
        """
        claims = self.jwt.verify_token(token)

        if claims.kind == PrincipalKind.STUDENT:
            student = self.students.get(claims.principal_id)
            if student is None:
                raise InvalidTokenError("Account no longer exists")
            self._ensure_student_allowed(student)
            return student

        admin = self.admins.get(claims.principal_id)
        if admin is None:
            raise InvalidTokenError("Account no longer exists")
        return admin

    @staticmethod
    def _ensure_student_allowed(student: Student) -> None:
        if not student.is_verified:
            raise PendingApprovalError()
        if not student.is_active:
            raise AccountDisabledError()
