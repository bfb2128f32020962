"""
Create an administrator account.

Usage:
    smartmess-create-admin --email admin@smartmess.com --name Admin [--password ...] [--role admin]

The password is prompted for when not given and is never printed.
"""

import argparse
import getpass
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from smartmess.config.logging import configure_logging
from smartmess.config.settings import Settings, get_settings
from smartmess.core.exceptions import SmartMessError, ValidationError
from smartmess.core.security import PasswordHasher
from smartmess.db.database import Database
from smartmess.models import Admin
from smartmess.models.enums import AdminRole
from smartmess.repositories import AdminRepository
from smartmess.schemas.student import AdminCreate

logger = logging.getLogger("smartmess.scripts.create_admin")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a SmartMess administrator")
    parser.add_argument("--email", required=True, help="Admin login email")
    parser.add_argument("--name", default="Admin", help="Display name")
    parser.add_argument("--password", help="Password (prompted when omitted)")
    parser.add_argument(
        "--role",
        choices=[role.value for role in AdminRole],
        default=AdminRole.SUPERADMIN.value,
        help="Administrator role",
    )
    return parser


def create_admin(database: Database, settings: Settings, data: AdminCreate) -> Admin:
    """
    Insert the administrator.

    Raises:
        ValidationError: If the password is too short
        ConflictError: If the email is already registered
    """
    if len(data.password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters")

    hasher = PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS)
    with database.session() as db:
        admin = Admin(
            name=data.name,
            email=data.email,
            password_hash=hasher.hash(data.password),
            role=data.role,
        )
        return AdminRepository(db).insert(admin)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    password = args.password or getpass.getpass("Admin password: ")
    try:
        data = AdminCreate(name=args.name, email=args.email, password=password, role=args.role)
    except PydanticValidationError as e:
        logger.error(f"Invalid admin details: {e.errors()[0]['msg']}")
        return 1

    database = Database(settings)
    database.open()
    try:
        if not settings.is_production():
            database.create_all()
        admin = create_admin(database, settings, data)
    except SmartMessError as e:
        logger.error(f"Could not create admin: {e.message}")
        return 1
    finally:
        database.close()

    logger.info(f"Admin created: {admin.email} ({admin.role.value})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
