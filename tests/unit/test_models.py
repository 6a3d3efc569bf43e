"""Unit tests for analysis result types."""
from __future__ import annotations

import json
from dataclasses import FrozenInstanceError

import pytest

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


@pytest.fixture
def result():
    return AnalysisResult(
        url="https://example.com",
        overall_score=72,
        summary="Summary text",
        score_summary=[AnalysisScoreSummary("Content Quality", 70)],
        score_breakdown=[
            ScoreBreakdown("Structured Data", 80, 20, "Good", example="Type: FAQPage"),
            ScoreBreakdown("Content Freshness", 40, 10, "Old"),
        ],
        recommendations=[
            Recommendation(RecommendationType.CRITICAL, "Fix it", "Broken", "Repair"),
        ],
    )


class TestEnums:
    @pytest.mark.parametrize("value", ["finance", "FINANCE", "  Finance "])
    def test_industry_lookup(self, value):
        assert Industry.lookup(value) is Industry.FINANCE

    def test_unknown_lookup(self):
        assert Industry.lookup("mining") is None
        assert ContentFocus.lookup("") is None
        assert ContentFocus.lookup(None) is None

    def test_hyphenated_values(self):
        assert Industry.lookup("e-commerce") is Industry.ECOMMERCE
        assert ContentFocus.lookup("How-To") is ContentFocus.HOW_TO


class TestAnalysisOptions:
    def test_defaults(self):
        options = AnalysisOptions()
        assert options.is_default
        assert not options.is_advanced

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"industry": "finance"},
            {"content_focus": "news"},
            {"competitor_url": "https://other.example.com"},
            {"analysis_depth": "advanced"},
        ],
    )
    def test_any_option_is_not_default(self, kwargs):
        assert not AnalysisOptions(**kwargs).is_default

    def test_advanced_case_insensitive(self):
        assert AnalysisOptions(analysis_depth="Advanced").is_advanced


class TestAnalysisResult:
    def test_wire_shape(self, result):
        data = result.to_dict()
        assert list(data) == [
            "url", "overallScore", "summary", "scoreSummary", "scoreBreakdown", "recommendations",
        ]
        assert data["scoreBreakdown"][0]["example"] == "Type: FAQPage"
        assert "example" not in data["scoreBreakdown"][1]
        assert data["recommendations"][0]["type"] == "critical"

    def test_from_dict(self, result):
        assert AnalysisResult.from_dict(result.to_dict()) == result

    def test_critical_count(self, result):
        assert result.critical_count() == 1

    def test_breakdown_is_frozen(self, result):
        with pytest.raises(FrozenInstanceError):
            result.score_breakdown[0].score = 0  # type: ignore[misc]


class TestAnalysisRecord:
    def test_stores_json_strings(self, result):
        record = AnalysisRecord.from_result(7, "2024-06-01T00:00:00+00:00", result)

        assert record.id == 7
        assert record.url == "https://example.com"
        assert record.overall_score == 72
        assert json.loads(record.score_breakdown)[1]["factor"] == "Content Freshness"
        assert json.loads(record.recommendations)[0]["title"] == "Fix it"

    def test_to_result(self, result):
        record = AnalysisRecord.from_result(1, "2024-06-01T00:00:00+00:00", result)
        assert record.to_result() == result

    def test_to_dict(self, result):
        data = AnalysisRecord.from_result(1, "2024-06-01T00:00:00+00:00", result).to_dict()
        assert data["id"] == 1
        assert data["timestamp"] == "2024-06-01T00:00:00+00:00"
        assert isinstance(data["scoreSummary"], str)
