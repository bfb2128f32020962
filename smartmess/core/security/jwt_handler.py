"""
JWT token management utilities.

Issues and verifies the signed bearer tokens carried by students and
administrators.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from smartmess.core.exceptions import InvalidTokenError
from smartmess.models.enums import PrincipalKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    """A signed token together with its explicit expiry."""

    token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims recovered from a verified token."""

    principal_id: str
    email: str
    kind: PrincipalKind
    expires_at: datetime


class JWTManager:
    """
    JWT token manager for authentication.

    Tokens carry the principal id (``sub``), email and principal kind and
    are valid for a fixed window from issue.
    """

    DEFAULT_ALGORITHM = "HS256"
    DEFAULT_EXPIRE_DAYS = 7

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: str = DEFAULT_ALGORITHM,
        expire_days: int = DEFAULT_EXPIRE_DAYS,
    ):
        """
        Initialize JWT manager.

        Args:
            secret_key: Secret key for signing tokens (auto-generated if None)
            algorithm: JWT algorithm (default: HS256)
            expire_days: Token lifetime in days
        """
        self.secret_key = secret_key or secrets.token_urlsafe(32)
        self.algorithm = algorithm
        self.expire_days = expire_days

    def issue_token(
        self,
        principal_id: str,
        kind: PrincipalKind,
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> IssuedToken:
        """
        Create a signed access token.

        Args:
            principal_id: Student or administrator id
            kind: Principal kind stored in the token
            email: Account email
            expires_delta: Custom lifetime, mainly for tests

        Returns:
            The encoded token and its expiry instant
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(days=self.expire_days))

        payload: Dict[str, Any] = {
            "sub": str(principal_id),
            "email": email,
            "kind": PrincipalKind(kind).value,
            "iat": now,
            "exp": expire,
            "jti": secrets.token_hex(16),
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token issued for {kind} {principal_id}")
        # Drop sub-second precision so the reported expiry matches the signed claim
        return IssuedToken(token=token, expires_at=expire.replace(microsecond=0))

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify and decode a token.

        Raises:
            InvalidTokenError: If the token is malformed, tampered with or expired
        """
        if not token:
            raise InvalidTokenError("No token provided")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "kind"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise InvalidTokenError("Invalid token")

        try:
            kind = PrincipalKind(payload["kind"])
        except ValueError:
            raise InvalidTokenError("Invalid token")

        return TokenClaims(
            principal_id=str(payload["sub"]),
            email=payload.get("email", ""),
            kind=kind,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
