"""AEO scoring pipeline: aggregation, adjustments, recommendations and summary."""
from aeo_checker.analysis.aggregator import build_result, calculate_weighted_score, score_content
from aeo_checker.analysis.analyzer import analyze
from aeo_checker.analysis.models import (
    AnalysisOptions,
    AnalysisRecord,
    AnalysisResult,
    AnalysisScoreSummary,
    ContentFocus,
    Industry,
    Recommendation,
    RecommendationType,
    ScoreBreakdown,
)

__all__ = [
    "analyze",
    "build_result",
    "calculate_weighted_score",
    "score_content",
    "AnalysisOptions",
    "AnalysisRecord",
    "AnalysisResult",
    "AnalysisScoreSummary",
    "ContentFocus",
    "Industry",
    "Recommendation",
    "RecommendationType",
    "ScoreBreakdown",
]
