"""
Security primitives: password hashing and token signing.
"""

from smartmess.core.security.jwt_handler import IssuedToken, JWTManager, TokenClaims
from smartmess.core.security.password_hasher import PasswordHasher

__all__ = ["JWTManager", "IssuedToken", "TokenClaims", "PasswordHasher"]
