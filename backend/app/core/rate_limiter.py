"""
Rate Limiting for the Mess Feedback API
=======================================
Fixed-window limits keyed by client address, counted in slowapi's
process-local storage. Counters reset when the process restarts; they exist
to slow abuse down, not to account quotas.

- /api/auth/signup + /api/auth/login: 10 per 15 minutes, one shared bucket
- /api/complaints (POST): 10 per hour

Limits are applied as route dependencies rather than slowapi decorators.
FastAPI resolves dependencies before it reports body validation errors, so
malformed requests are charged to the bucket as well.
"""

import time

from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from app.core.config import settings
from app.core.exceptions import RateLimitError
from app.core.logging_config import logger

AUTH_LIMIT_MESSAGE = "Too many login attempts. Please try again later."
COMPLAINT_LIMIT_MESSAGE = "Too many complaints. Please try again later."


def get_client_identifier(request: Request) -> str:
    """Rate limit key: the client address"""
    return f"ip:{get_remote_address(request)}"


# Created once per process and attached to app.state in main
limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


class RateLimit:
    """
    Route dependency that charges one hit per request to a named bucket.

    Usage:
        @router.post("/login", dependencies=[Depends(auth_rate_limit)])
    """

    def __init__(self, limit_value: str, scope: str, error_message: str):
        self.item = parse(limit_value)
        self.scope = scope
        self.error_message = error_message

    def _retry_after(self, key: str) -> int:
        reset_at, _ = limiter.limiter.get_window_stats(self.item, key, self.scope)
        return max(1, int(reset_at - time.time()))

    async def __call__(self, request: Request) -> None:
        if not limiter.enabled:
            return

        key = get_client_identifier(request)
        if limiter.limiter.hit(self.item, key, self.scope):
            return

        logger.warning(
            f"[RateLimit] Exceeded for {key} on {request.url.path}",
            extra={
                "event_type": "rate_limited",
                "http_path": request.url.path,
                "limit": str(self.item),
                "scope": self.scope,
            }
        )
        raise RateLimitError(self.error_message, retry_after=self._retry_after(key))


# Signup and login draw from the same per-address bucket
auth_rate_limit = RateLimit(settings.AUTH_RATE_LIMIT, "auth", AUTH_LIMIT_MESSAGE)

complaint_rate_limit = RateLimit(
    settings.COMPLAINT_RATE_LIMIT, "complaints", COMPLAINT_LIMIT_MESSAGE
)
