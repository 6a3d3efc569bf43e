"""Weighted aggregation of criterion scores into an AnalysisResult."""
from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime

from aeo_checker.analysis.adjustments import apply_adjustments
from aeo_checker.analysis.models import (
    AnalysisOptions,
    AnalysisResult,
    AnalysisScoreSummary,
    ScoreBreakdown,
)
from aeo_checker.analysis.recommendations import generate_recommendations
from aeo_checker.analysis.summary import generate_summary
from aeo_checker.criteria.registry import CriterionRegistry, criteria_registry
from aeo_checker.criteria.scorers import (
    AUTHORITY_SIGNALS,
    CONTENT_CLARITY,
    CONTENT_FRESHNESS,
    QUESTION_BASED_CONTENT,
    SEMANTIC_KEYWORDS,
    STRUCTURED_DATA,
)
from aeo_checker.parser.content_parser import WebsiteContent

# Category -> factors averaged into it
SCORE_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Content Quality": (QUESTION_BASED_CONTENT, CONTENT_CLARITY, AUTHORITY_SIGNALS),
    "Structure": (STRUCTURED_DATA, SEMANTIC_KEYWORDS),
    "User Intent Match": (QUESTION_BASED_CONTENT, SEMANTIC_KEYWORDS, CONTENT_FRESHNESS),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def calculate_weighted_score(breakdown: Iterable[ScoreBreakdown]) -> int:
    """Weight-normalised average of the breakdown scores.

    Returns 0 when the total weight is 0.
    """
    items = list(breakdown)
    total_weight = sum(item.weight for item in items)
    if total_weight <= 0:
        return 0
    weighted = sum(item.score * item.weight / 100 for item in items)
    return round_half_up(weighted * 100 / total_weight)


def summarize_categories(breakdown: Iterable[ScoreBreakdown]) -> list[AnalysisScoreSummary]:
    """Average each category's factors; missing factors are skipped."""
    scores = {item.factor: item.score for item in breakdown}
    summary = []
    for category, factors in SCORE_CATEGORIES.items():
        values = [scores[factor] for factor in factors if factor in scores]
        average = round_half_up(sum(values) / len(values)) if values else 0
        summary.append(AnalysisScoreSummary(category=category, score=average))
    return summary


def score_content(
    content: WebsiteContent,
    registry: CriterionRegistry | None = None,
    now: datetime | None = None,
) -> list[ScoreBreakdown]:
    """Run every criterion and build fresh, unadjusted ScoreBreakdown entries."""
    registry = registry or criteria_registry
    return [
        ScoreBreakdown(
            factor=criterion.factor,
            score=result.score,
            weight=criterion.weight,
            details=criterion.describe(result.score),
            example=result.example or None,
        )
        for criterion, result in registry.run_all(content, now=now)
    ]


def build_result(
    content: WebsiteContent,
    options: AnalysisOptions | None = None,
    competitor: WebsiteContent | None = None,
    registry: CriterionRegistry | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Score, adjust and summarise one page.

    Args:
        content: Page being analysed
        options: Industry, content focus, depth and competitor settings
        competitor: Competitor page, already fetched
        registry: Criteria to run (defaults to the six AEO criteria)
        now: Reference time for freshness scoring

    Returns:
        AnalysisResult for content.url
    """
    options = options or AnalysisOptions()
    breakdown = score_content(content, registry, now)
    competitor_breakdown = score_content(competitor, registry, now) if competitor is not None else None
    breakdown = apply_adjustments(breakdown, content, options, competitor_breakdown)

    overall_score = calculate_weighted_score(breakdown)
    score_summary = summarize_categories(breakdown)
    recommendations = generate_recommendations(breakdown, content)
    summary = generate_summary(overall_score, score_summary, recommendations)

    return AnalysisResult(
        url=content.url,
        overall_score=overall_score,
        summary=summary,
        score_summary=score_summary,
        score_breakdown=breakdown,
        recommendations=recommendations,
    )
