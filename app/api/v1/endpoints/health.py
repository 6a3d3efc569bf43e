"""Health check endpoint."""
from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from aeo_checker import __version__
from aeo_checker.criteria.registry import criteria_registry
from aeo_checker.storage.analysis_store import AnalysisStore
from app.api.models.responses import HealthResponse
from app.api.v1.deps import get_analysis_store

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and service status.",
)
async def health_check(store: AnalysisStore = Depends(get_analysis_store)) -> HealthResponse:
    """Return API health status."""
    checks = {
        "criteria_registered": len(criteria_registry.list_all()) == 6,
        "criteria_weights": criteria_registry.total_weight() == 100,
        "analysis_store": store is not None,
    }
    overall_status = "healthy" if all(checks.values()) else "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
