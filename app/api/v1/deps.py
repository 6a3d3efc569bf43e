"""API dependencies for rate limiting and storage."""
from __future__ import annotations

import time

from cachetools import TTLCache
from fastapi import HTTPException, Request, status

from aeo_checker.config.settings import settings
from aeo_checker.storage.analysis_store import AnalysisStore, analysis_store
from app.api.models.errors import ErrorCodes, error_body


def client_ip(request: Request) -> str:
    """Client address, honouring X-Forwarded-For behind a reverse proxy."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class APIRateLimiter:
    """Per-IP rate limiter for API endpoints with automatic TTL-based cleanup."""

    def __init__(self, limit: int | None = None, window: int | None = None, max_identifiers: int | None = None):
        self.limit = limit or settings.api.analyze_rate_limit
        self.window = window or settings.api.rate_limit_window
        # TTL = 2x rate limit window so entries outlive the window they cover
        self._requests: TTLCache[str, list[float]] = TTLCache(
            maxsize=max_identifiers or settings.api.max_tracked_clients,
            ttl=self.window * 2,
        )

    def check(self, request: Request) -> tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Returns:
            (allowed, remaining, reset_seconds)
        """
        identifier = f"ip:{client_ip(request)}"
        now = time.time()
        window_start = now - self.window

        requests = [t for t in self._requests.get(identifier, []) if t > window_start]

        current_count = len(requests)
        remaining = max(0, self.limit - current_count - 1)

        if current_count >= self.limit:
            # Reset when the oldest request leaves the window
            oldest = min(requests) if requests else now
            reset_seconds = int(oldest + self.window - now)
            self._requests[identifier] = requests
            return False, 0, max(1, reset_seconds)

        requests.append(now)
        self._requests[identifier] = requests
        return True, remaining, self.window


# Global rate limiter instance
api_rate_limiter = APIRateLimiter()


async def check_rate_limit(request: Request) -> None:
    """Check and enforce API rate limits.

    Adds rate limit info to request.state for response headers.
    Raises HTTPException if rate limit exceeded.
    """
    allowed, remaining, reset = api_rate_limiter.check(request)

    request.state.rate_limit_remaining = remaining
    request.state.rate_limit_reset = reset
    request.state.rate_limit_limit = api_rate_limiter.limit

    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=error_body(
                ErrorCodes.RATE_LIMIT_EXCEEDED,
                "Too many requests. Please slow down.",
                {"retry_after": reset, "limit": api_rate_limiter.limit},
            ),
            headers={
                "Retry-After": str(reset),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(int(time.time()) + reset),
            },
        )


def get_analysis_store() -> AnalysisStore:
    return analysis_store
