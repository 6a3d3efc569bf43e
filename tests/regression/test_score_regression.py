"""
AEO Score Regression Tests.

These tests ensure that code changes don't unexpectedly alter scoring behavior.
If a test fails, it means the scoring algorithm has changed - this may be intentional
(in which case update the expected values) or a bug (fix the code).

Golden data approach:
- Each fixture has pre-computed per-criterion scores at a fixed reference time
- The overall score, category scores and recommendations follow from them
- Any deviation indicates an algorithm change
"""
from __future__ import annotations

import pytest

from aeo_checker.analysis.aggregator import build_result
from aeo_checker.analysis.models import AnalysisOptions, RecommendationType
from aeo_checker.criteria import (
    AUTHORITY_SIGNALS,
    CONTENT_CLARITY,
    CONTENT_FRESHNESS,
    QUESTION_BASED_CONTENT,
    SEMANTIC_KEYWORDS,
    STRUCTURED_DATA,
)


def _scores(result) -> dict[str, int]:
    return {item.factor: item.score for item in result.score_breakdown}


def _examples(result) -> dict[str, str | None]:
    return {item.factor: item.example for item in result.score_breakdown}


class TestRichFixture:
    """
    aeo_rich.html has:
    - FAQPage, Article, Organization, HowTo and BreadcrumbList JSON-LD
    - Question headers with short answers
    - Lists, emphasis and short paragraphs
    - A visible date twelve days before the reference time
    - Author byline, citation and three authority links
    """

    @pytest.fixture
    def result(self, rich_content, fixed_now):
        return build_result(rich_content, now=fixed_now)

    def test_criterion_scores(self, result):
        assert _scores(result) == {
            QUESTION_BASED_CONTENT: 100,
            STRUCTURED_DATA: 100,
            CONTENT_CLARITY: 100,
            SEMANTIC_KEYWORDS: 70,
            CONTENT_FRESHNESS: 90,
            AUTHORITY_SIGNALS: 95,
        }

    def test_overall_score(self, result):
        assert result.overall_score == 94

    def test_category_scores(self, result):
        assert {c.category: c.score for c in result.score_summary} == {
            "Content Quality": 98,
            "Structure": 85,
            "User Intent Match": 87,
        }

    def test_examples(self, result):
        examples = _examples(result)
        assert examples[QUESTION_BASED_CONTENT] == 'Header question: "What is answer engine optimization?"'
        assert examples[STRUCTURED_DATA] == 'Type: FAQPage, Name: "AEO FAQ", Sample question: "What is AEO?"'
        assert examples[SEMANTIC_KEYWORDS] == (
            'Meta keywords: "answer engine optimization, aeo, seo, structured data"'
        )
        assert examples[CONTENT_FRESHNESS] == "Most recent date: May 20, 2024"
        assert examples[AUTHORITY_SIGNALS] == "Author: Dana Whitfield"

    def test_recommendations(self, result):
        assert [(r.type, r.title) for r in result.recommendations] == [
            (RecommendationType.POSITIVE, "Excellent Question-Based Content"),
            (RecommendationType.WARNING, "Consider Content Updates"),
            (RecommendationType.WARNING, "Strengthen Answer-Ready Content"),
        ]

    def test_summary(self, result):
        assert result.summary.startswith("Your website is well-optimized for AI answer engines. ")
        assert "Your strongest area is Content Quality (98/100)" in result.summary
        assert "while Structure (85/100) could use the most improvement" in result.summary


class TestThinFixture:
    """
    thin.html has:
    - No schema, lists, emphasis or dates
    - One heading over a block of marketing copy
    """

    @pytest.fixture
    def result(self, thin_content, fixed_now):
        return build_result(thin_content, now=fixed_now)

    def test_criterion_scores(self, result):
        assert _scores(result) == {
            QUESTION_BASED_CONTENT: 50,
            STRUCTURED_DATA: 30,
            CONTENT_CLARITY: 65,
            SEMANTIC_KEYWORDS: 40,
            CONTENT_FRESHNESS: 40,
            AUTHORITY_SIGNALS: 40,
        }

    def test_overall_score_rounds_half_up(self, result):
        # 45.5 before rounding
        assert result.overall_score == 46

    def test_category_scores(self, result):
        assert {c.category: c.score for c in result.score_summary} == {
            "Content Quality": 52,
            "Structure": 35,
            "User Intent Match": 43,
        }

    def test_recommendations(self, result):
        assert [(r.type, r.title) for r in result.recommendations] == [
            (RecommendationType.CRITICAL, "Improve Schema Markup"),
            (RecommendationType.CRITICAL, "Expand Semantic Keyword Coverage"),
            (RecommendationType.WARNING, "Consider Content Updates"),
        ]

    def test_summary(self, result):
        assert result.summary == (
            "Your website needs significant optimization for AI answer engines. "
            "Your strongest area is Content Quality (52/100), while Structure (35/100) "
            "could use the most improvement. "
            "Our analysis identified 2 critical issues that need immediate attention."
        )

    def test_examples_never_empty(self, result):
        assert all(example for example in _examples(result).values())


class TestAdjustedScores:
    """Golden values with analysis options applied."""

    def test_finance_industry(self, thin_content, fixed_now):
        result = build_result(thin_content, AnalysisOptions(industry="finance"), now=fixed_now)
        scores = _scores(result)
        assert scores[CONTENT_FRESHNESS] == 55
        assert scores[AUTHORITY_SIGNALS] == 50
        # 45.5 + 1.5 + 1.0
        assert result.overall_score == 48

    def test_advanced_rich_page(self, rich_content, fixed_now):
        result = build_result(rich_content, AnalysisOptions(analysis_depth="advanced"), now=fixed_now)
        scores = _scores(result)
        assert scores[AUTHORITY_SIGNALS] == 100
        assert scores[CONTENT_CLARITY] == 100

    def test_thin_against_rich_competitor(self, thin_content, rich_content, fixed_now):
        result = build_result(thin_content, competitor=rich_content, now=fixed_now)
        scores = _scores(result)
        assert scores == {
            QUESTION_BASED_CONTENT: 45,
            STRUCTURED_DATA: 25,
            CONTENT_CLARITY: 60,
            SEMANTIC_KEYWORDS: 35,
            CONTENT_FRESHNESS: 35,
            AUTHORITY_SIGNALS: 35,
        }
