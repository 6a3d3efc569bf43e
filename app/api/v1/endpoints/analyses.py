"""Recent analyses endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from aeo_checker.config.settings import settings
from aeo_checker.storage.analysis_store import AnalysisStore
from app.api.models.responses import AnalysisListResponse, AnalysisRecordItem
from app.api.v1.deps import get_analysis_store

router = APIRouter(tags=["Analysis"])


@router.get(
    "/analyses",
    response_model=AnalysisListResponse,
    summary="List recent analyses",
    description="Most recent stored analyses, newest first.",
)
async def list_analyses(
    limit: int = Query(settings.cache.recent_limit, ge=1, le=100),
    store: AnalysisStore = Depends(get_analysis_store),
) -> AnalysisListResponse:
    records = store.list_recent(limit)
    return AnalysisListResponse(
        analyses=[AnalysisRecordItem.from_record(record) for record in records],
        count=len(records),
    )
