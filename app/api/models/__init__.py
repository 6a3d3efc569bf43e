"""API Pydantic models."""
from app.api.models.errors import ErrorCodes, ErrorDetail, ErrorResponse, error_body
from app.api.models.requests import AnalyzeRequest
from app.api.models.responses import (
    AnalysisListResponse,
    AnalysisRecordItem,
    AnalysisResponse,
    HealthResponse,
)

__all__ = [
    "AnalyzeRequest",
    "AnalysisResponse",
    "AnalysisRecordItem",
    "AnalysisListResponse",
    "HealthResponse",
    "ErrorResponse",
    "ErrorDetail",
    "ErrorCodes",
    "error_body",
]
