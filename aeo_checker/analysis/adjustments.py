"""Score adjustments applied after the criterion scorers.

Every adjustment takes a list of ScoreBreakdown and returns a new list;
the input list and its entries are left untouched.
"""
from __future__ import annotations

from dataclasses import replace

import structlog
from bs4 import BeautifulSoup

from aeo_checker.analysis.models import AnalysisOptions, ContentFocus, Industry, ScoreBreakdown
from aeo_checker.criteria.base import clamp_score
from aeo_checker.criteria.scorers import (
    AUTHORITY_SIGNALS,
    CONTENT_CLARITY,
    CONTENT_FRESHNESS,
    QUESTION_BASED_CONTENT,
    SEMANTIC_KEYWORDS,
    STRUCTURED_DATA,
    authority_links,
)
from aeo_checker.parser.content_parser import WebsiteContent

logger = structlog.get_logger(__name__)

INDUSTRY_ADJUSTMENTS: dict[Industry, dict[str, int]] = {
    Industry.ECOMMERCE: {STRUCTURED_DATA: 10, SEMANTIC_KEYWORDS: 5},
    Industry.HEALTHCARE: {AUTHORITY_SIGNALS: 15, CONTENT_CLARITY: 10},
    Industry.FINANCE: {CONTENT_FRESHNESS: 15, AUTHORITY_SIGNALS: 10},
    Industry.EDUCATION: {QUESTION_BASED_CONTENT: 15, CONTENT_CLARITY: 10},
    Industry.TECHNOLOGY: {CONTENT_FRESHNESS: 10, SEMANTIC_KEYWORDS: 10},
}

CONTENT_FOCUS_ADJUSTMENTS: dict[ContentFocus, dict[str, int]] = {
    ContentFocus.EDUCATIONAL: {QUESTION_BASED_CONTENT: 15, CONTENT_CLARITY: 10},
    ContentFocus.INFORMATIONAL: {SEMANTIC_KEYWORDS: 10, AUTHORITY_SIGNALS: 10},
    ContentFocus.TRANSACTIONAL: {STRUCTURED_DATA: 15, CONTENT_FRESHNESS: 10},
    ContentFocus.NEWS: {CONTENT_FRESHNESS: 20, AUTHORITY_SIGNALS: 15},
    ContentFocus.HOW_TO: {CONTENT_CLARITY: 15, QUESTION_BASED_CONTENT: 10},
}

COMPETITOR_MARGIN = 15
COMPETITOR_PENALTY = 5
COMPETITOR_BONUS = 5
COMPETITOR_BETTER_NOTE = " Your competitor performs better in this area."
COMPETITOR_WORSE_NOTE = " You outperform your competitor in this area."


def apply_deltas(breakdown: list[ScoreBreakdown], deltas: dict[str, int]) -> list[ScoreBreakdown]:
    """Add per-factor deltas, clamping each adjusted score to [0, 100]."""
    adjusted = []
    for item in breakdown:
        delta = deltas.get(item.factor)
        if delta:
            item = replace(item, score=clamp_score(item.score + delta))
        adjusted.append(item)
    return adjusted


def apply_industry(breakdown: list[ScoreBreakdown], industry: str | None) -> list[ScoreBreakdown]:
    key = Industry.lookup(industry)
    if key is None:
        if industry:
            logger.debug("unknown_industry_ignored", industry=industry)
        return list(breakdown)
    return apply_deltas(breakdown, INDUSTRY_ADJUSTMENTS[key])


def apply_content_focus(breakdown: list[ScoreBreakdown], content_focus: str | None) -> list[ScoreBreakdown]:
    key = ContentFocus.lookup(content_focus)
    if key is None:
        if content_focus:
            logger.debug("unknown_content_focus_ignored", content_focus=content_focus)
        return list(breakdown)
    return apply_deltas(breakdown, CONTENT_FOCUS_ADJUSTMENTS[key])


def _alt_text_ratio(html: str) -> float | None:
    """Share of <img> tags with non-empty alt text; None when there are no images."""
    images = BeautifulSoup(html, "lxml").find_all("img")
    if not images:
        return None
    with_alt = sum(1 for img in images if (img.get("alt") or "").strip())
    return with_alt / len(images)


def apply_advanced(breakdown: list[ScoreBreakdown], content: WebsiteContent) -> list[ScoreBreakdown]:
    """Extra checks for analysis_depth="advanced".

    - exactly one H1 and several H2s: Content Clarity +5
    - more than 80% of images with alt text: Content Clarity +5
    - three or more authority-domain links: Authority Signals +10
    """
    clarity_bonus = 0
    if len(content.headings("h1")) == 1 and len(content.headings("h2")) > 1:
        clarity_bonus += 5

    alt_ratio = _alt_text_ratio(content.html)
    if alt_ratio is not None and alt_ratio > 0.8:
        clarity_bonus += 5

    deltas = {CONTENT_CLARITY: clarity_bonus}
    if len(authority_links(content.links)) >= 3:
        deltas[AUTHORITY_SIGNALS] = 10
    return apply_deltas(breakdown, deltas)


def apply_competitor(
    breakdown: list[ScoreBreakdown],
    competitor: list[ScoreBreakdown],
) -> list[ScoreBreakdown]:
    """Compare against a competitor's breakdown, matching factors by name."""
    competitor_by_factor = {item.factor: item for item in competitor}
    adjusted = []
    for item in breakdown:
        other = competitor_by_factor.get(item.factor)
        if other is not None:
            if other.score > item.score + COMPETITOR_MARGIN:
                item = replace(
                    item,
                    score=clamp_score(item.score - COMPETITOR_PENALTY),
                    details=item.details + COMPETITOR_BETTER_NOTE,
                    example=item.example or other.example,
                )
            elif item.score > other.score + COMPETITOR_MARGIN:
                item = replace(
                    item,
                    score=clamp_score(item.score + COMPETITOR_BONUS),
                    details=item.details + COMPETITOR_WORSE_NOTE,
                )
        adjusted.append(item)
    return adjusted


def apply_adjustments(
    breakdown: list[ScoreBreakdown],
    content: WebsiteContent,
    options: AnalysisOptions,
    competitor: list[ScoreBreakdown] | None = None,
) -> list[ScoreBreakdown]:
    """Apply industry, content focus, advanced and competitor adjustments in that order."""
    adjusted = apply_industry(breakdown, options.industry)
    adjusted = apply_content_focus(adjusted, options.content_focus)
    if options.is_advanced:
        adjusted = apply_advanced(adjusted, content)
    if competitor:
        adjusted = apply_competitor(adjusted, competitor)
    return adjusted
