"""Result types for an AEO analysis."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RecommendationType(Enum):
    """Severity of a recommendation."""
    POSITIVE = "positive"
    WARNING = "warning"
    CRITICAL = "critical"


class Industry(Enum):
    ECOMMERCE = "e-commerce"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    EDUCATION = "education"
    TECHNOLOGY = "technology"

    @classmethod
    def lookup(cls, value: str | None) -> Industry | None:
        """Case-insensitive lookup; unknown or empty values give None."""
        return _lookup(cls, value)


class ContentFocus(Enum):
    EDUCATIONAL = "educational"
    INFORMATIONAL = "informational"
    TRANSACTIONAL = "transactional"
    NEWS = "news"
    HOW_TO = "how-to"

    @classmethod
    def lookup(cls, value: str | None) -> ContentFocus | None:
        """Case-insensitive lookup; unknown or empty values give None."""
        return _lookup(cls, value)


def _lookup(enum_cls, value):
    if not value:
        return None
    normalized = value.strip().lower()
    for member in enum_cls:
        if member.value == normalized:
            return member
    return None


STANDARD_DEPTH = "standard"
ADVANCED_DEPTH = "advanced"


@dataclass(frozen=True)
class AnalysisOptions:
    """Optional knobs for an analysis run.

    Attributes:
        competitor_url: Page to compare against, scored with the same criteria
        industry: Industry name (see Industry)
        content_focus: Content focus name (see ContentFocus)
        analysis_depth: "standard" or "advanced"
    """
    competitor_url: str | None = None
    industry: str | None = None
    content_focus: str | None = None
    analysis_depth: str = STANDARD_DEPTH

    @property
    def is_advanced(self) -> bool:
        return (self.analysis_depth or "").lower() == ADVANCED_DEPTH

    @property
    def is_default(self) -> bool:
        """True when no option changes the scoring."""
        return (
            not self.competitor_url
            and not self.industry
            and not self.content_focus
            and not self.is_advanced
        )


@dataclass(frozen=True)
class ScoreBreakdown:
    """Score of one criterion after adjustments.

    Attributes:
        factor: Criterion name
        score: Integer score in [0, 100]
        weight: Percentage weight of the criterion
        details: Tier message, possibly extended by competitor comparison
        example: Excerpt from the page, if any
    """
    factor: str
    score: int
    weight: int
    details: str
    example: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "factor": self.factor,
            "score": self.score,
            "weight": self.weight,
            "details": self.details,
        }
        if self.example:
            data["example"] = self.example
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoreBreakdown:
        return cls(
            factor=data["factor"],
            score=int(data["score"]),
            weight=int(data["weight"]),
            details=data.get("details", ""),
            example=data.get("example"),
        )


@dataclass(frozen=True)
class AnalysisScoreSummary:
    category: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "score": self.score}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisScoreSummary:
        return cls(category=data["category"], score=int(data["score"]))


@dataclass(frozen=True)
class Recommendation:
    type: RecommendationType
    title: str
    description: str
    action: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "action": self.action,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Recommendation:
        return cls(
            type=RecommendationType(data["type"]),
            title=data["title"],
            description=data["description"],
            action=data["action"],
        )


@dataclass
class AnalysisResult:
    """Outcome of analysing one URL.

    to_dict() produces the JSON wire shape (camelCase keys) shared by the
    HTTP API, the JSON report and the persisted record.
    """
    url: str
    overall_score: int
    summary: str
    score_summary: list[AnalysisScoreSummary] = field(default_factory=list)
    score_breakdown: list[ScoreBreakdown] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "overallScore": self.overall_score,
            "summary": self.summary,
            "scoreSummary": [item.to_dict() for item in self.score_summary],
            "scoreBreakdown": [item.to_dict() for item in self.score_breakdown],
            "recommendations": [item.to_dict() for item in self.recommendations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisResult:
        return cls(
            url=data["url"],
            overall_score=int(data["overallScore"]),
            summary=data.get("summary", ""),
            score_summary=[AnalysisScoreSummary.from_dict(d) for d in data.get("scoreSummary", [])],
            score_breakdown=[ScoreBreakdown.from_dict(d) for d in data.get("scoreBreakdown", [])],
            recommendations=[Recommendation.from_dict(d) for d in data.get("recommendations", [])],
        )

    def critical_count(self) -> int:
        return sum(1 for r in self.recommendations if r.type == RecommendationType.CRITICAL)


@dataclass(frozen=True)
class AnalysisRecord:
    """Persisted form of an AnalysisResult.

    Sub-objects are stored as JSON strings; to_result() decodes them.
    """
    id: int
    url: str
    timestamp: str
    overall_score: int
    summary: str
    score_summary: str
    score_breakdown: str
    recommendations: str

    @classmethod
    def from_result(cls, record_id: int, timestamp: str, result: AnalysisResult) -> AnalysisRecord:
        data = result.to_dict()
        return cls(
            id=record_id,
            url=result.url,
            timestamp=timestamp,
            overall_score=result.overall_score,
            summary=result.summary,
            score_summary=json.dumps(data["scoreSummary"]),
            score_breakdown=json.dumps(data["scoreBreakdown"]),
            recommendations=json.dumps(data["recommendations"]),
        )

    def to_result(self) -> AnalysisResult:
        return AnalysisResult.from_dict({
            "url": self.url,
            "overallScore": self.overall_score,
            "summary": self.summary,
            "scoreSummary": json.loads(self.score_summary),
            "scoreBreakdown": json.loads(self.score_breakdown),
            "recommendations": json.loads(self.recommendations),
        })

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "timestamp": self.timestamp,
            "overallScore": self.overall_score,
            "summary": self.summary,
            "scoreSummary": self.score_summary,
            "scoreBreakdown": self.score_breakdown,
            "recommendations": self.recommendations,
        }
