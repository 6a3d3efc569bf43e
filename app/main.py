"""FastAPI entry point."""
import time

from cachetools import TTLCache
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from aeo_checker import __version__
from aeo_checker.config.logging import setup_logging
from aeo_checker.config.settings import settings
from app.api.v1.deps import client_ip
from app.api.v1.router import router as api_router

setup_logging()

# Global per-IP limit across all routes
RATE_LIMIT_REQUESTS = settings.security.rate_limit_requests
RATE_LIMIT_WINDOW = settings.security.rate_limit_window


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory rate limiter by IP address, entries expire with the window."""

    def __init__(self, app, requests_limit: int = 100, window_seconds: int = 900):
        super().__init__(app)
        self.requests_limit = requests_limit
        self.window_seconds = window_seconds
        self.requests: TTLCache[str, list[float]] = TTLCache(
            maxsize=settings.api.max_tracked_clients, ttl=window_seconds
        )

    async def dispatch(self, request: Request, call_next):
        # Docs and health checks are never limited
        if request.url.path in ("/api/docs", "/api/redoc", "/api/openapi.json", "/api/v1/health"):
            return await call_next(request)

        ip = client_ip(request)
        now = time.time()
        window_start = now - self.window_seconds

        recent = [t for t in self.requests.get(ip, []) if t > window_start]

        if len(recent) >= self.requests_limit:
            self.requests[ip] = recent
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Please try again later."},
                headers={"Retry-After": str(self.window_seconds)},
            )

        recent.append(now)
        self.requests[ip] = recent

        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    # CSP for Swagger UI / ReDoc (needs CDN resources)
    API_DOCS_CSP = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
        "img-src 'self' data: https://cdn.jsdelivr.net https://fastapi.tiangolo.com; "
        "font-src 'self' https://cdn.jsdelivr.net; "
        "connect-src 'self'; "
        "frame-ancestors 'none'"
    )

    DEFAULT_CSP = "default-src 'none'; frame-ancestors 'none'"

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if request.url.path in ("/api/docs", "/api/redoc", "/api/openapi.json"):
            response.headers["Content-Security-Policy"] = self.API_DOCS_CSP
        else:
            response.headers["Content-Security-Policy"] = self.DEFAULT_CSP

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


class APIRateLimitHeadersMiddleware(BaseHTTPMiddleware):
    """Add rate limit headers to API responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if request.url.path.startswith("/api"):
            if hasattr(request.state, "rate_limit_remaining"):
                response.headers["X-RateLimit-Remaining"] = str(
                    request.state.rate_limit_remaining
                )
            if hasattr(request.state, "rate_limit_reset"):
                response.headers["X-RateLimit-Reset"] = str(
                    int(time.time()) + request.state.rate_limit_reset
                )
            if hasattr(request.state, "rate_limit_limit"):
                response.headers["X-RateLimit-Limit"] = str(
                    request.state.rate_limit_limit
                )

        return response


app = FastAPI(
    title="AEO Checker API",
    description="""
API for analyzing web pages for Answer Engine Optimization (AEO).

## Features

- **AEO Score**: weighted 0-100 score across six criteria
- **Category Scores**: Content Quality, Structure, User Intent Match
- **Recommendations**: prioritized fixes and strengths
- **Options**: competitor comparison, industry and content-focus tuning, advanced checks

Analyses are kept in memory; an option-free request for a URL analysed in the
last 24 hours returns the stored result.
""",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Add middlewares (order matters: outermost first)
app.add_middleware(APIRateLimitHeadersMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    RateLimitMiddleware,
    requests_limit=RATE_LIMIT_REQUESTS,
    window_seconds=RATE_LIMIT_WINDOW,
)

app.include_router(api_router, prefix="/api/v1")
