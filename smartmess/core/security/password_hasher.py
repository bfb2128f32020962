"""
Password hashing and verification utilities.

Provides salted password hashing using bcrypt with configurable rounds.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Handle password hashing and verification using bcrypt.

    Plaintext passwords are never stored or logged; only the encoded hash
    leaves this class.
    """

    DEFAULT_ROUNDS = 12
    MIN_ROUNDS = 4
    MAX_ROUNDS = 31
    MAX_BYTES = 72

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Initialize password hasher.

        Args:
            rounds: Number of bcrypt rounds (4-31, default 12)

        Raises:
            ValueError: If rounds is outside valid range
        """
        if not (self.MIN_ROUNDS <= rounds <= self.MAX_ROUNDS):
            raise ValueError(
                f"Rounds must be between {self.MIN_ROUNDS} and {self.MAX_ROUNDS}, got {rounds}"
            )
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a password with a freshly generated salt.

        Args:
            password: Plain text password to hash

        Returns:
            Hashed password as string

        Raises:
            ValueError: If password is empty or longer than 72 bytes
            TypeError: If password is not a string
        """
        if not isinstance(password, str):
            raise TypeError("Password must be a string")
        if not password:
            raise ValueError("Password cannot be empty")

        encoded = password.encode("utf-8")
        if len(encoded) > self.MAX_BYTES:
            raise ValueError(f"Password must be at most {self.MAX_BYTES} bytes")

        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Returns False for empty input or a hash bcrypt cannot parse.
        """
        if not password or not hashed_password:
            return False

        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Unreadable password hash: {e}")
            return False
