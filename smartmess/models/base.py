"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base, the common primary key and timestamp
columns, and a helper for string-valued enum columns.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Any, Dict, List, Optional, Type
from uuid import uuid4

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from smartmess.utils.date_utils import now_utc

Base = declarative_base()


def enum_column_type(enum_cls: Type[PyEnum], name: str) -> Enum:
    """
    Build a non-native enum type that stores member values.

    Values such as ``in-progress`` are not valid identifiers, so the stored
    text is the member value rather than its name.
    """
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=20,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        nullable=False,
    )

    def to_dict(self, exclude: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Convert model instance to a dictionary of column values.

        Args:
            exclude: List of field names to exclude
        """
        exclude = exclude or []
        result: Dict[str, Any] = {}
        for column in self.__table__.columns:
            if column.key in exclude:
                continue
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, PyEnum):
                value = value.value
            result[column.key] = value
        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    """
    Mixin for automatic timestamp tracking.

    Timestamps are set on the Python side so ordering is stable to the
    microsecond on every backend.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )
