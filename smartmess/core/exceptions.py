"""
Custom Exceptions for the SmartMess service

This module defines the exception classes raised by services and
repositories. Each carries the HTTP status and error code used when it is
rendered as an API response.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    TOKEN_INVALID = "TOKEN_INVALID"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"


class SmartMessError(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the API error body"""
        body: Dict[str, Any] = {
            "success": False,
            "message": self.message,
            "errorCode": self.error_code.value,
        }
        if self.details:
            body["details"] = self.details
        return body

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class ValidationError(SmartMessError):
    """Raised when request data fails a business validation rule"""

    status_code = 400
    error_code = ErrorCode.VALIDATION_ERROR
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        field_errors: Optional[Dict[str, List[str]]] = None,
    ):
        details = {"field_errors": field_errors} if field_errors else None
        super().__init__(message, details)


class AuthenticationError(SmartMessError):
    """Raised when the caller cannot be identified"""

    status_code = 401
    error_code = ErrorCode.AUTHENTICATION_FAILED
    default_message = "Authentication required"


class InvalidTokenError(AuthenticationError):
    """Raised for a missing, malformed, tampered or expired bearer token"""

    error_code = ErrorCode.TOKEN_INVALID
    default_message = "Invalid or expired token"


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match an account"""

    error_code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid email or password"


class AuthorizationError(SmartMessError):
    """Raised when an authenticated principal lacks the required kind or role"""

    status_code = 403
    error_code = ErrorCode.INSUFFICIENT_PERMISSIONS
    default_message = "Access denied. Admin privileges required."


class PendingApprovalError(AuthorizationError):
    """Raised when a student account has not been verified by an admin yet"""

    error_code = ErrorCode.PENDING_APPROVAL
    default_message = "Your account is pending admin approval"


class AccountDisabledError(AuthorizationError):
    """Raised when a student account has been deactivated by an admin"""

    error_code = ErrorCode.ACCOUNT_DISABLED
    default_message = "Your account has been disabled. Please contact the mess office."


class NotFoundError(SmartMessError):
    """
    Raised when a requested resource is absent or not owned by the caller.

    The two cases share one response so callers cannot test for other
    users' records.
    """

    status_code = 404
    error_code = ErrorCode.RESOURCE_NOT_FOUND
    default_message = "Resource not found"

    def __init__(self, resource_type: str = "Resource", message: Optional[str] = None):
        super().__init__(message or f"{resource_type} not found", {"resource_type": resource_type})


class ConflictError(SmartMessError):
    """Raised when a write violates a uniqueness constraint"""

    status_code = 400
    error_code = ErrorCode.DUPLICATE_ENTRY
    default_message = "Record already exists"


class RepositoryError(SmartMessError):
    """Raised when the datastore fails for reasons other than a constraint"""

    status_code = 500
    error_code = ErrorCode.DATABASE_ERROR
    default_message = "Database operation failed"


__all__ = [
    "ErrorCode",
    "SmartMessError",
    "ValidationError",
    "AuthenticationError",
    "InvalidTokenError",
    "InvalidCredentialsError",
    "AuthorizationError",
    "PendingApprovalError",
    "AccountDisabledError",
    "NotFoundError",
    "ConflictError",
    "RepositoryError",
]
