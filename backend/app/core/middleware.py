"""
Mess Feedback - HTTP Middleware

AccessLogMiddleware writes one access line per request, tagged with the
request id and, for authenticated calls, the student id that
get_current_user leaves on request.state.

Passwords travel through /api/auth and complaint text through
/api/complaints. Bodies on those prefixes are never logged, not even at
DEBUG; other JSON bodies are previewed at DEBUG only.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from app.core.exceptions import PayloadTooLargeError, error_response
from app.core.logging_config import (
    logger,
    set_request_id,
    set_user_id,
    generate_request_id,
)


# Health checks and API docs produce no access lines
QUIET_PATHS = frozenset({
    "/health",
    "/api/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
})

# Request bodies under these prefixes carry credentials or complaint text
PRIVATE_BODY_PREFIXES = ("/api/auth", "/api/complaints")

BODY_PREVIEW_CHARS = 512
SLOW_REQUEST_MS = 1000


def is_quiet(path: str) -> bool:
    return path in QUIET_PATHS


def body_is_loggable(path: str) -> bool:
    """False for any path whose body may hold a password or complaint text"""
    for prefix in PRIVATE_BODY_PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return False
    return True


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Request id propagation, timing headers and the access log"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)

        # Created here so the route's Request shares the same state mapping
        request.state.user_id = None

        path = request.url.path
        quiet = is_quiet(path)
        started = time.perf_counter()

        try:
            if not quiet:
                await self._preview_body(request, path)

            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    f"{request.method} {path} raised {type(exc).__name__}",
                    exc_info=True,
                    extra=self._fields(request, started, error_type=type(exc).__name__),
                )
                raise

            elapsed_ms = (time.perf_counter() - started) * 1000
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"

            if not quiet:
                self._log_access(request, response.status_code, started)
            return response
        finally:
            set_request_id("")
            set_user_id("")

    def _fields(self, request: Request, started: float, **extra: Any) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "event_type": "http_request",
            "http_method": request.method,
            "http_path": request.url.path,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }
        user_id = self._user_id(request)
        if user_id:
            fields["user_id"] = user_id
        fields.update(extra)
        return fields

    @staticmethod
    def _user_id(request: Request) -> Optional[str]:
        return getattr(request.state, "user_id", None)

    def _log_access(self, request: Request, status_code: int, started: float) -> None:
        fields = self._fields(request, started, http_status=status_code)
        who = fields.get("user_id", "anonymous")
        logger.log(
            _level_for(status_code),
            f"{request.method} {request.url.path} {status_code} "
            f"{fields['duration_ms']:.2f}ms user={who}",
            extra=fields,
        )
        if fields["duration_ms"] > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow request: {request.method} {request.url.path}",
                extra={**fields, "event_type": "slow_request"},
            )

    async def _preview_body(self, request: Request, path: str) -> None:
        if request.method not in ("POST", "PUT", "PATCH"):
            return
        if not body_is_loggable(path) or not logger.isEnabledFor(logging.DEBUG):
            return

        body = await request.body()
        if not body:
            return
        logger.debug(
            f"{request.method} {path} body: "
            f"{body.decode('utf-8', errors='replace')[:BODY_PREVIEW_CHARS]}",
            extra={"event_type": "http_request_body", "http_path": path, "body_bytes": len(body)},
        )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Static hardening headers; the API never renders HTML"""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "no-referrer",
        "Cache-Control": "no-store",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in self.HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests whose declared Content-Length exceeds max_bytes"""

    def __init__(self, app: ASGIApp, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_bytes:
            logger.warning(
                f"Rejected {declared}-byte body on {request.url.path}",
                extra={"event_type": "request_too_large", "http_path": request.url.path},
            )
            error = PayloadTooLargeError(self.max_bytes)
            return JSONResponse(status_code=error.status_code, content=error_response(error))

        return await call_next(request)


__all__ = [
    "AccessLogMiddleware",
    "SecurityHeadersMiddleware",
    "BodySizeLimitMiddleware",
    "body_is_loggable",
    "PRIVATE_BODY_PREFIXES",
]
