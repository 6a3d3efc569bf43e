"""Criterion registry: the six AEO criteria in their fixed order."""
from __future__ import annotations

from aeo_checker.criteria.base import Criterion, CriterionScore
from aeo_checker.criteria.scorers import (
    AUTHORITY_SIGNALS,
    CONTENT_CLARITY,
    CONTENT_FRESHNESS,
    QUESTION_BASED_CONTENT,
    SEMANTIC_KEYWORDS,
    STRUCTURED_DATA,
    score_authority_signals,
    score_content_clarity,
    score_content_freshness,
    score_question_based_content,
    score_semantic_keywords,
    score_structured_data,
)
from aeo_checker.parser.content_parser import WebsiteContent


class CriterionRegistry:
    """Registry for managing and running criterion scorers.

    Criteria keep their registration order, which is the order of the
    score breakdown.

    Usage:
        registry = CriterionRegistry()
        registry.register(criterion)
        scores = registry.run_all(content)
    """

    def __init__(self):
        self._criteria: dict[str, Criterion] = {}

    def register(self, criterion: Criterion) -> None:
        """Register a criterion, replacing any with the same factor name."""
        self._criteria[criterion.factor] = criterion

    def unregister(self, factor: str) -> None:
        self._criteria.pop(factor, None)

    def get(self, factor: str) -> Criterion | None:
        """Get a criterion by factor name.

        Args:
            factor: Factor name, e.g. "Structured Data"

        Returns:
            Criterion or None if not registered
        """
        return self._criteria.get(factor)

    def list_all(self) -> list[Criterion]:
        return list(self._criteria.values())

    def total_weight(self) -> int:
        return sum(criterion.weight for criterion in self._criteria.values())

    def run(self, factor: str, content: WebsiteContent, **context) -> CriterionScore | None:
        criterion = self._criteria.get(factor)
        if criterion is None:
            return None
        return criterion.scorer(content, **context)

    def run_all(self, content: WebsiteContent, **context) -> list[tuple[Criterion, CriterionScore]]:
        """Run every registered criterion against one page.

        Args:
            content: Page snapshot
            **context: Extra scorer context, e.g. now=datetime for freshness

        Returns:
            (criterion, score) pairs in registration order
        """
        return [(criterion, criterion.scorer(content, **context)) for criterion in self._criteria.values()]


def build_default_registry() -> CriterionRegistry:
    """Registry holding the six AEO criteria; weights sum to 100."""
    registry = CriterionRegistry()
    registry.register(Criterion(
        factor=QUESTION_BASED_CONTENT,
        weight=25,
        description="Content directly answers common user queries",
        scorer=score_question_based_content,
        details=(
            "Strong FAQ sections with direct answers to common queries",
            "Some question-based content but could be improved",
            "Limited question-based content",
        ),
    ))
    registry.register(Criterion(
        factor=STRUCTURED_DATA,
        weight=20,
        description="Use of schema markup to help AI understand content",
        scorer=score_structured_data,
        details=(
            "Comprehensive schema markup implementation",
            "Basic schema markup present",
            "Limited implementation of schema markup",
        ),
    ))
    registry.register(Criterion(
        factor=CONTENT_CLARITY,
        weight=20,
        description="Clear, concise writing with good formatting",
        scorer=score_content_clarity,
        details=(
            "Clear writing with good formatting and concise points",
            "Reasonably clear content but some improvements needed",
            "Content lacks clarity and structure",
        ),
    ))
    registry.register(Criterion(
        factor=SEMANTIC_KEYWORDS,
        weight=15,
        description="Inclusion of related terms and context",
        scorer=score_semantic_keywords,
        details=(
            "Excellent use of related terms and semantic context",
            "Good use of related terms but could expand topical coverage",
            "Limited use of related terms and semantic context",
        ),
    ))
    registry.register(Criterion(
        factor=CONTENT_FRESHNESS,
        weight=10,
        description="How recent and updated the content is",
        scorer=score_content_freshness,
        details=(
            "Content is recent and regularly updated",
            "Some content is recent but updates are inconsistent",
            "Several pages with outdated content",
        ),
    ))
    registry.register(Criterion(
        factor=AUTHORITY_SIGNALS,
        weight=10,
        description="Citations, sources, and expertise indicators",
        scorer=score_authority_signals,
        details=(
            "Strong authority signals with citations and expert sources",
            "Good citation of sources and expert opinions",
            "Limited authority signals",
        ),
    ))
    return registry


# Global registry instance
criteria_registry = build_default_registry()
