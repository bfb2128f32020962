"""
Base schema classes and the standard API response envelope.
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

__all__ = [
    "BaseSchema",
    "SuccessResponse",
    "MessageResponse",
    "ErrorResponse",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Output is camelCase; input accepts camelCase or snake_case field names.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        use_enum_values=False,
        str_strip_whitespace=True,
    )


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success response."""

    success: bool = Field(default=True, description="Success flag")
    message: Optional[str] = Field(default=None, description="Response message")
    data: Optional[T] = Field(default=None, description="Response data")

    @classmethod
    def create(cls, data: Optional[T] = None, message: Optional[str] = None):
        """Create success response."""
        return cls(success=True, message=message, data=data)


class MessageResponse(BaseSchema):
    """Simple message response."""

    success: bool = True
    message: str

    @classmethod
    def create(cls, message: str):
        return cls(success=True, message=message)


class ErrorResponse(BaseSchema):
    """Standard error response."""

    success: bool = Field(default=False, description="Success flag")
    message: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(default=None, description="Application error code")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Error details")
