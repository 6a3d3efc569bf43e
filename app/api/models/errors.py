"""API error response models."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: ErrorDetail

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": {
                    "code": "URL_NOT_ACCESSIBLE",
                    "message": "Failed to fetch website: Not Found",
                    "details": {"url": "https://example.com", "status_code": 404},
                }
            }
        }
    }


class ErrorCodes:
    """Standardized error codes."""

    # 4xx Client Errors
    INVALID_URL = "INVALID_URL"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # 5xx Server Errors
    URL_NOT_ACCESSIBLE = "URL_NOT_ACCESSIBLE"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"


def error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the HTTPException detail payload for an error."""
    return {"error": ErrorDetail(code=code, message=message, details=details).model_dump()}
