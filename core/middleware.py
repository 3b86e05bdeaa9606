"""
Application Middleware for the Skin API.

This module defines the FastAPI middleware that handles cross-cutting concerns
for every request: correlation, error handling and performance logging.

Key Middleware Components:
- `CorrelationMiddleware`: Assigns a correlation ID to every incoming request
  (taken from `X-Correlation-ID` / `X-Request-ID` or freshly generated) and
  echoes it back in the response headers.
- `ErrorHandlingMiddleware`: Last line of defense. A `SkinAPIException` that
  escapes a route is mapped through `to_error_response`; any other exception
  becomes the generic processing-error response, so a failing request never
  affects the process or other requests.
- `PerformanceMiddleware`: Logs the start and end of each request, adds an
  `X-Process-Time` header and warns about slow requests.

Ordering:
Starlette runs the most recently added middleware first. `main.py` adds
`CorrelationMiddleware` last so the correlation ID is set before the other
middleware log anything.
"""

import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .logging_config import set_correlation_id, get_logger
from .exceptions import SkinAPIException, ProcessingError, to_error_response

logger = get_logger("core.middleware")

SLOW_REQUEST_THRESHOLD_SECONDS = 1.0


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware to add correlation IDs to requests"""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = (
            request.headers.get("X-Correlation-ID")
            or request.headers.get("X-Request-ID")
            or str(uuid.uuid4())
        )

        set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for centralized error handling"""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except SkinAPIException as e:
            logger.error(
                f"Application error: {str(e)}",
                extra={
                    "error_type": type(e).__name__,
                    "error_code": e.error_code,
                    "details": e.details,
                    "path": request.url.path,
                    "method": request.method,
                },
            )
            response = to_error_response(e)

        except Exception as e:
            logger.error(
                f"Unexpected error: {str(e)}",
                extra={
                    "error_type": type(e).__name__,
                    "path": request.url.path,
                    "method": request.method,
                },
                exc_info=True,
            )
            response = to_error_response(ProcessingError(type(e).__name__))

        corr_id = getattr(request.state, "correlation_id", None)
        if corr_id:
            response.headers["X-Correlation-ID"] = corr_id
        return response


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Middleware for performance monitoring and logging"""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "user_agent": request.headers.get("user-agent"),
                "client_ip": request.client.host if request.client else None,
            },
        )

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(round(process_time * 1000, 2))

        logger.info(
            f"Request completed: {request.method} {request.url.path} - {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2),
            },
        )

        if process_time > SLOW_REQUEST_THRESHOLD_SECONDS:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "process_time_ms": round(process_time * 1000, 2),
                    "threshold_exceeded": True,
                },
            )

        return response
