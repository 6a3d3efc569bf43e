"""AEO analysis entry point: fetch, score, aggregate."""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog

from aeo_checker.analysis.aggregator import build_result
from aeo_checker.analysis.models import AnalysisOptions, AnalysisResult
from aeo_checker.fetcher.html_fetcher import fetch_content
from aeo_checker.parser.content_parser import WebsiteContent

logger = structlog.get_logger(__name__)

Fetcher = Callable[[str], WebsiteContent]


def analyze(
    url: str,
    options: AnalysisOptions | None = None,
    *,
    fetcher: Fetcher = fetch_content,
    now: datetime | None = None,
) -> AnalysisResult:
    """Analyse a URL for answer-engine readiness.

    Args:
        url: Page to analyse
        options: Competitor, industry, content focus and depth settings
        fetcher: Callable turning a URL into WebsiteContent
        now: Reference time for freshness scoring (defaults to the current time)

    Returns:
        AnalysisResult

    Raises:
        ValueError: The URL (or competitor URL) is invalid or blocked
        FetchError: A page could not be retrieved
    """
    options = options or AnalysisOptions()
    log = logger.bind(url=url)
    log.info(
        "analysis_started",
        competitor_url=options.competitor_url,
        industry=options.industry,
        content_focus=options.content_focus,
        depth=options.analysis_depth,
    )

    content = fetcher(url)
    competitor = fetcher(options.competitor_url) if options.competitor_url else None

    result = build_result(content, options, competitor=competitor, now=now)
    log.info(
        "analysis_completed",
        overall_score=result.overall_score,
        recommendations=len(result.recommendations),
    )
    return result
