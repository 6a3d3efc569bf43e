"""API response models."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from aeo_checker.analysis.models import AnalysisRecord, AnalysisResult


class ScoreBreakdownItem(BaseModel):
    """Score of a single criterion."""

    factor: str
    score: int = Field(..., ge=0, le=100)
    weight: int = Field(..., ge=0, le=100, description="Percentage weight")
    details: str
    example: str | None = None


class CategoryScore(BaseModel):
    category: str
    score: int = Field(..., ge=0, le=100)


class RecommendationItem(BaseModel):
    type: Literal["positive", "warning", "critical"]
    title: str
    description: str
    action: str


class AnalysisResponse(BaseModel):
    """Complete AEO analysis result."""

    url: str
    overall_score: int = Field(..., ge=0, le=100, alias="overallScore")
    summary: str
    score_summary: list[CategoryScore] = Field(..., alias="scoreSummary")
    score_breakdown: list[ScoreBreakdownItem] = Field(..., alias="scoreBreakdown")
    recommendations: list[RecommendationItem]

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "url": "https://example.com/article",
                "overallScore": 72,
                "summary": "Your website is moderately optimized for AI answer engines, "
                "but there's room for improvement. ...",
                "scoreSummary": [{"category": "Content Quality", "score": 70}],
                "scoreBreakdown": [
                    {
                        "factor": "Structured Data",
                        "score": 65,
                        "weight": 20,
                        "details": "Basic schema markup present",
                        "example": 'Type: FAQPage, Sample question: "What is AEO?"',
                    }
                ],
                "recommendations": [
                    {
                        "type": "warning",
                        "title": "Improve Schema Markup",
                        "description": "...",
                        "action": "Implement JSON-LD schema for key content sections",
                    }
                ],
            }
        },
    }

    @classmethod
    def from_result(cls, result: AnalysisResult) -> AnalysisResponse:
        return cls.model_validate(result.to_dict())


class AnalysisRecordItem(BaseModel):
    """Stored analysis, as listed by GET /analyses."""

    id: int
    url: str
    timestamp: datetime
    overall_score: int = Field(..., alias="overallScore")
    summary: str

    model_config = {"populate_by_name": True}

    @classmethod
    def from_record(cls, record: AnalysisRecord) -> AnalysisRecordItem:
        return cls(
            id=record.id,
            url=record.url,
            timestamp=datetime.fromisoformat(record.timestamp),
            overall_score=record.overall_score,
            summary=record.summary,
        )


class AnalysisListResponse(BaseModel):
    analyses: list[AnalysisRecordItem]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    timestamp: datetime
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual health check results"
    )
