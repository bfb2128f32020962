"""
Pydantic schemas for requests and responses.
"""

from smartmess.schemas.common import BaseSchema, ErrorResponse, MessageResponse, SuccessResponse

__all__ = ["BaseSchema", "SuccessResponse", "MessageResponse", "ErrorResponse"]
