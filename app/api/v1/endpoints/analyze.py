"""Analysis endpoint."""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool

from aeo_checker.analysis.analyzer import analyze
from aeo_checker.fetcher.html_fetcher import FetchError
from aeo_checker.storage.analysis_store import AnalysisStore
from app.api.models.errors import ErrorCodes, ErrorResponse, error_body
from app.api.models.requests import AnalyzeRequest
from app.api.models.responses import AnalysisResponse
from app.api.v1.deps import check_rate_limit, get_analysis_store

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Analysis"])


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or blocked URL"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Analysis failed"},
        502: {"model": ErrorResponse, "description": "URL not accessible"},
    },
    summary="Analyze a URL for AEO readiness",
    description="""
Fetch a page and score it for Answer Engine Optimization (AEO).

**Criteria (weight):**
- Question-Based Content (25%)
- Structured Data (20%)
- Content Clarity (20%)
- Semantic Keywords (15%)
- Content Freshness (10%)
- Authority Signals (10%)

Requests without options reuse an analysis of the same URL from the last 24 hours.
""",
)
async def analyze_url(
    request: Request,
    body: AnalyzeRequest,
    store: AnalysisStore = Depends(get_analysis_store),
) -> AnalysisResponse:
    """Analyze a URL, or return its recent cached analysis."""
    await check_rate_limit(request)

    options = body.to_options()
    log = logger.bind(url=body.url)

    if options.is_default:
        cached = store.get_recent(body.url)
        if cached is not None:
            log.info("analysis_cache_hit", record_id=cached.id)
            return AnalysisResponse.from_result(cached.to_result())

    try:
        result = await run_in_threadpool(analyze, body.url, options)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_body(ErrorCodes.INVALID_URL, str(e), {"url": body.url}),
        )
    except FetchError as e:
        log.warning("analysis_fetch_failed", error=str(e), status_code=e.status_code)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=error_body(
                ErrorCodes.URL_NOT_ACCESSIBLE,
                str(e),
                {"url": e.url or body.url, "status_code": e.status_code},
            ),
        )
    except Exception as e:
        log.exception("analysis_failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_body(ErrorCodes.ANALYSIS_FAILED, f"Analysis failed: {e}"),
        )

    # Only option-free results are reusable for later plain requests
    if options.is_default:
        store.save(result)
    return AnalysisResponse.from_result(result)
