"""
Account models: students and administrators.

The two principal kinds live in separate tables; both carry the shared
identity fields (email, password hash, timestamps).
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smartmess.models.base import BaseModel, TimestampMixin, enum_column_type
from smartmess.models.enums import AdminRole, PrincipalKind

if TYPE_CHECKING:
    from smartmess.models.attendance import MealAttendance
    from smartmess.models.complaint import Complaint
    from smartmess.models.notification import NotificationRead
    from smartmess.models.rating import Rating

__all__ = ["Student", "Admin"]


class Student(BaseModel, TimestampMixin):
    """
    A diner. Access requires both ``is_verified`` (granted by an admin) and
    ``is_active`` (revocable by an admin).
    """

    __tablename__ = "students"

    kind = PrincipalKind.STUDENT

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    roll_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    hostel_name: Mapped[str] = mapped_column(String(100), nullable=False)
    room_number: Mapped[str] = mapped_column(String(20), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    ratings: Mapped[List["Rating"]] = relationship(
        back_populates="student", cascade="all, delete-orphan"
    )
    complaints: Mapped[List["Complaint"]] = relationship(
        back_populates="student", cascade="all, delete-orphan"
    )
    attendance: Mapped[List["MealAttendance"]] = relationship(
        back_populates="student", cascade="all, delete-orphan"
    )
    notification_reads: Mapped[List["NotificationRead"]] = relationship(
        back_populates="student", cascade="all, delete-orphan"
    )


class Admin(BaseModel, TimestampMixin):
    """Mess office staff. ``superadmin`` may perform destructive operations."""

    __tablename__ = "admins"

    kind = PrincipalKind.ADMIN

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[AdminRole] = mapped_column(
        enum_column_type(AdminRole, "admin_role"),
        nullable=False,
        default=AdminRole.ADMIN,
    )

    @property
    def is_superadmin(self) -> bool:
        return self.role == AdminRole.SUPERADMIN
