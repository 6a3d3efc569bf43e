"""API request models."""
from __future__ import annotations

from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from aeo_checker.analysis.models import AnalysisOptions


def _check_http_url(value: str) -> str:
    value = value.strip()
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError("Only absolute http and https URLs are supported")
    return value


class AnalyzeRequest(BaseModel):
    """Request body for URL analysis."""

    url: str = Field(
        ...,
        description="The URL to analyze for AEO readiness",
        examples=["https://example.com/article"],
    )
    competitor_url: str | None = Field(
        default=None,
        alias="competitorUrl",
        description="Competitor page scored with the same criteria",
    )
    industry: str | None = Field(
        default=None,
        description="e-commerce, healthcare, finance, education or technology",
    )
    content_focus: str | None = Field(
        default=None,
        alias="contentFocus",
        description="educational, informational, transactional, news or how-to",
    )
    analysis_depth: Literal["standard", "advanced"] = Field(
        default="standard",
        alias="analysisDepth",
    )

    model_config = {"populate_by_name": True}

    @field_validator("url")
    @classmethod
    def validate_url_scheme(cls, v: str) -> str:
        """Ensure URL uses http or https."""
        return _check_http_url(v)

    @field_validator("competitor_url")
    @classmethod
    def validate_competitor_scheme(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return _check_http_url(v)

    def to_options(self) -> AnalysisOptions:
        return AnalysisOptions(
            competitor_url=self.competitor_url,
            industry=self.industry,
            content_focus=self.content_focus,
            analysis_depth=self.analysis_depth,
        )
