"""
Core middleware registration for the FastAPI application.

Provides request tracking, timing and the process-level catch-all that
turns unexpected failures into a 500 JSON response.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from smartmess.config.logging import get_logger

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each incoming request.

    The ID is taken from the incoming header when an upstream proxy set one,
    stored in ``request.state.request_id`` and echoed in the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that measures and logs request processing time.

    Adds an X-Process-Time header with the duration in seconds.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        request_id = get_request_id(request) or "unknown"

        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {process_time:.4f}s",
            extra={
                "request_id": request_id,
                "method": request.method,
                "url": request.url.path,
                "status_code": response.status_code,
                "process_time": f"{process_time:.4f}s",
                "client_host": request.client.host if request.client else None,
            },
        )
        return response


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs error responses and converts unhandled exceptions.

    A failure in one request must never take the process down, so anything
    that escapes the route handlers is logged with its traceback and answered
    with a generic 500 body. Exception text is only exposed in debug mode.
    """

    def __init__(self, app: ASGIApp, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request) or "unknown"
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request processing failed: {exc}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": request.url.path,
                    "error_type": type(exc).__name__,
                },
                exc_info=True,
            )
            body = {"success": False, "message": "Internal server error"}
            if self.debug:
                body["error"] = str(exc)
            return JSONResponse(status_code=500, content=body)

        if response.status_code >= 400:
            logger.warning(
                f"Request returned error status {response.status_code}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": request.url.path,
                    "status_code": response.status_code,
                },
            )
        return response


def register_middlewares(app: FastAPI, debug: bool = False) -> None:
    """
    Register the core middlewares on the application.

    Middlewares run in reverse order of registration, so the request ID is
    assigned first and is available to the timing and error loggers.

    Execution order:
        1. RequestIDMiddleware
        2. ErrorLoggingMiddleware
        3. TimingMiddleware
    """
    app.add_middleware(TimingMiddleware)
    app.add_middleware(ErrorLoggingMiddleware, debug=debug)
    app.add_middleware(RequestIDMiddleware)
    logger.debug("Core middlewares registered")


def get_request_id(request: Request) -> Optional[str]:
    """Return the request ID assigned by RequestIDMiddleware, if any."""
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "ErrorLoggingMiddleware",
    "register_middlewares",
    "get_request_id",
]
