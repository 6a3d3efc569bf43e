"""Natural-language summary of an analysis."""
from __future__ import annotations

from aeo_checker.analysis.models import AnalysisScoreSummary, Recommendation, RecommendationType


def _opening(score: int) -> str:
    if score >= 80:
        return "Your website is well-optimized for AI answer engines. "
    if score >= 60:
        return (
            "Your website is moderately optimized for AI answer engines, "
            "but there's room for improvement. "
        )
    return "Your website needs significant optimization for AI answer engines. "


def generate_summary(
    score: int,
    categories: list[AnalysisScoreSummary],
    recommendations: list[Recommendation],
) -> str:
    """Compose the summary paragraph.

    Ties between categories resolve to the first one in list order.
    """
    text = _opening(score)

    if categories:
        best = max(categories, key=lambda c: c.score)
        worst = min(categories, key=lambda c: c.score)
        text += (
            f"Your strongest area is {best.category} ({best.score}/100), "
            f"while {worst.category} ({worst.score}/100) could use the most improvement. "
        )

    critical = sum(1 for r in recommendations if r.type == RecommendationType.CRITICAL)
    if critical:
        text += f"Our analysis identified {critical} critical issues that need immediate attention."
    else:
        text += "Our analysis identified several key areas where you can enhance your AEO performance."
    return text
