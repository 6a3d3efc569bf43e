"""Centralized configuration settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class FetcherSettings:
    """Settings for the content fetcher."""
    request_timeout: int = 15
    max_response_size: int = 10 * 1024 * 1024  # 10 MB
    max_redirects: int = 5
    user_agent: str = "AEO-Checker/1.0 (+https://aeochecker.example)"


@dataclass
class CacheSettings:
    """Settings for the in-memory analysis store."""
    freshness_hours: int = 24
    recent_limit: int = 10


@dataclass
class SecuritySettings:
    """Security-related settings."""
    rate_limit_requests: int = 100
    rate_limit_window: int = 15 * 60  # seconds


@dataclass
class APISettings:
    """API-specific settings."""
    # Rate limiting for the analyze endpoint (requests per window)
    analyze_rate_limit: int = 10
    rate_limit_window: int = 60  # seconds
    max_tracked_clients: int = 10000

    # CORS
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class LoggingSettings:
    """Settings for structured logging."""
    level: str = "INFO"
    json: bool = False


@dataclass
class Settings:
    """Main application settings container."""
    fetcher: FetcherSettings = field(default_factory=FetcherSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    api: APISettings = field(default_factory=APISettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    # Application settings
    debug: bool = False

    def __post_init__(self):
        """Load settings from environment variables."""
        self.debug = os.environ.get("AEO_CHECKER_DEBUG", "").lower() in ("true", "1", "yes")

        # Fetcher overrides
        if timeout := os.environ.get("AEO_CHECKER_REQUEST_TIMEOUT"):
            self.fetcher.request_timeout = int(timeout)
        if user_agent := os.environ.get("AEO_CHECKER_USER_AGENT"):
            self.fetcher.user_agent = user_agent

        # Cache overrides
        if freshness := os.environ.get("AEO_CHECKER_CACHE_HOURS"):
            self.cache.freshness_hours = int(freshness)

        # Rate limiting overrides
        if rate_limit := os.environ.get("AEO_CHECKER_RATE_LIMIT"):
            self.security.rate_limit_requests = int(rate_limit)
        if analyze_limit := os.environ.get("AEO_API_ANALYZE_RATE_LIMIT"):
            self.api.analyze_rate_limit = int(analyze_limit)
        if cors := os.environ.get("AEO_API_CORS_ORIGINS"):
            self.api.cors_origins = [o.strip() for o in cors.split(",")]

        # Logging
        if level := os.environ.get("AEO_CHECKER_LOG_LEVEL"):
            self.logging.level = level.upper()
        self.logging.json = os.environ.get("AEO_CHECKER_LOG_JSON", "").lower() in ("true", "1", "yes")


# Global settings instance
settings = Settings()
