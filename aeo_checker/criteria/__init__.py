"""AEO criterion scorers and registry."""
from aeo_checker.criteria.base import Criterion, CriterionScore, clamp_score
from aeo_checker.criteria.registry import CriterionRegistry, build_default_registry, criteria_registry
from aeo_checker.criteria.scorers import (
    AUTHORITY_SIGNALS,
    CONTENT_CLARITY,
    CONTENT_FRESHNESS,
    QUESTION_BASED_CONTENT,
    SEMANTIC_KEYWORDS,
    STRUCTURED_DATA,
)

__all__ = [
    "Criterion",
    "CriterionScore",
    "clamp_score",
    "CriterionRegistry",
    "build_default_registry",
    "criteria_registry",
    "QUESTION_BASED_CONTENT",
    "STRUCTURED_DATA",
    "CONTENT_CLARITY",
    "SEMANTIC_KEYWORDS",
    "CONTENT_FRESHNESS",
    "AUTHORITY_SIGNALS",
]
