"""
Exception handlers that render errors in the standard response envelope.
"""

from typing import Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smartmess.config.logging import get_logger
from smartmess.core.exceptions import ErrorCode, SmartMessError
from smartmess.core.middleware import get_request_id

logger = get_logger(__name__)


async def smartmess_error_handler(request: Request, exc: SmartMessError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{exc.error_code.value}: {exc.message}",
            extra={"request_id": get_request_id(request), "url": request.url.path},
            exc_info=exc,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 with per-field messages."""
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        location = [str(part) for part in error.get("loc", ())[1:]] or ["request"]
        field_errors.setdefault(".".join(location), []).append(error.get("msg", "Invalid value"))

    first_field, first_messages = next(iter(field_errors.items()), ("request", ["Invalid request"]))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": f"Validation failed: {first_field}: {first_messages[0]}",
            "errorCode": ErrorCode.VALIDATION_ERROR.value,
            "details": {"field_errors": field_errors},
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SmartMessError, smartmess_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
