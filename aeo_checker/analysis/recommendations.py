"""Recommendation generation from a score breakdown."""
from __future__ import annotations

from aeo_checker.analysis.models import Recommendation, RecommendationType, ScoreBreakdown
from aeo_checker.criteria.scorers import (
    AUTHORITY_SIGNALS,
    CONTENT_CLARITY,
    CONTENT_FRESHNESS,
    QUESTION_BASED_CONTENT,
    SEMANTIC_KEYWORDS,
    STRUCTURED_DATA,
)
from aeo_checker.parser.content_parser import WebsiteContent

MIN_RECOMMENDATIONS = 3
IMPROVEMENT_THRESHOLD = 70
CRITICAL_THRESHOLD = 50
PRAISE_THRESHOLD = 80

# factor -> (title, description, action)
IMPROVEMENTS: dict[str, tuple[str, str, str]] = {
    QUESTION_BASED_CONTENT: (
        "Improve Question-Based Content",
        "Your site lacks content that directly answers common user questions. "
        "AI engines prefer content structured as questions and answers.",
        "Add FAQ sections and question-based headers",
    ),
    STRUCTURED_DATA: (
        "Improve Schema Markup",
        "Your site lacks comprehensive schema markup, especially FAQ and HowTo schemas "
        "that help AI engines understand your content structure.",
        "Implement JSON-LD schema for key content sections",
    ),
    CONTENT_CLARITY: (
        "Enhance Content Clarity",
        "Your content could be better structured with shorter paragraphs, bullet points, "
        "and clear headings to make it more digestible for AI engines.",
        "Break up content with clearer structure and formatting",
    ),
    SEMANTIC_KEYWORDS: (
        "Expand Semantic Keyword Coverage",
        "Your content lacks sufficient related terms and contextual keywords that help "
        "AI engines understand the topic depth.",
        "Add more related terms and contextual keywords",
    ),
    CONTENT_FRESHNESS: (
        "Content Freshness Issue",
        "Several key pages haven't been updated recently. AI engines favor fresh, "
        "current content when providing answers.",
        "Update content regularly with current information",
    ),
    AUTHORITY_SIGNALS: (
        "Boost Authority Signals",
        "Your content lacks sufficient authority indicators like citations, expert opinions, "
        "or credentials that help AI engines trust your content.",
        "Add citations and expert perspectives to build credibility",
    ),
}

# factor -> (title, description)
PRAISE: dict[str, tuple[str, str]] = {
    QUESTION_BASED_CONTENT: (
        "Excellent Question-Based Content",
        "Your site's FAQ sections and header structure effectively address user questions, "
        "making it easy for AI engines to extract answers.",
    ),
    STRUCTURED_DATA: (
        "Strong Schema Implementation",
        "Your site's structured data provides clear signals to AI engines about your "
        "content's purpose and organization.",
    ),
    CONTENT_CLARITY: (
        "Highly Readable Content",
        "Your content's clear structure and formatting makes it easy for AI engines "
        "to parse and understand.",
    ),
    SEMANTIC_KEYWORDS: (
        "Rich Semantic Coverage",
        "Your content effectively uses related terms and contextual keywords, helping "
        "AI engines understand topic depth.",
    ),
    CONTENT_FRESHNESS: (
        "Excellently Updated Content",
        "Your site's recent updates signal relevance and freshness to AI engines, "
        "improving ranking potential.",
    ),
    AUTHORITY_SIGNALS: (
        "Strong Authority Indicators",
        "Your content includes excellent citations and expertise markers that help "
        "establish credibility with AI systems.",
    ),
}

BASIC_SCHEMA = Recommendation(
    type=RecommendationType.WARNING,
    title="Add Basic Schema Markup",
    description="Your site is missing basic schema markup that helps AI engines understand "
    "your content's structure and purpose.",
    action="Implement basic JSON-LD schema for your content",
)

CONTENT_UPDATES = Recommendation(
    type=RecommendationType.WARNING,
    title="Consider Content Updates",
    description="Regular content updates signal relevance to AI engines and improve your "
    "chances of being featured in answers.",
    action="Establish a content update schedule for key pages",
)

# Used in order until the minimum count is reached
GENERIC_FALLBACKS = (
    Recommendation(
        type=RecommendationType.WARNING,
        title="Strengthen Answer-Ready Content",
        description="Lead each section with a short, direct answer before the supporting "
        "detail so AI engines can quote it verbatim.",
        action="Open key sections with a one or two sentence answer",
    ),
    Recommendation(
        type=RecommendationType.WARNING,
        title="Track AEO Performance Over Time",
        description="Answer engines re-evaluate pages as they change. Re-checking after each "
        "significant update shows which changes moved your score.",
        action="Re-run this analysis after every major content update",
    ),
)


def _has_title_containing(recommendations: list[Recommendation], word: str) -> bool:
    return any(word in r.title for r in recommendations)


def generate_recommendations(
    breakdown: list[ScoreBreakdown],
    content: WebsiteContent,
) -> list[Recommendation]:
    """Build recommendations from the two weakest and the strongest criteria.

    Works on sorted copies; the breakdown order is left untouched. Always
    returns at least three recommendations.
    """
    ascending = sorted(breakdown, key=lambda item: item.score)
    descending = sorted(breakdown, key=lambda item: -item.score)

    recommendations: list[Recommendation] = []

    for item in ascending[:2]:
        if item.score >= IMPROVEMENT_THRESHOLD or item.factor not in IMPROVEMENTS:
            continue
        title, description, action = IMPROVEMENTS[item.factor]
        rec_type = RecommendationType.CRITICAL if item.score < CRITICAL_THRESHOLD else RecommendationType.WARNING
        recommendations.append(Recommendation(rec_type, title, description, action))

    for item in descending[:1]:
        if item.score >= PRAISE_THRESHOLD and item.factor in PRAISE:
            title, description = PRAISE[item.factor]
            recommendations.append(
                Recommendation(RecommendationType.POSITIVE, title, description, "Keep this up")
            )

    if len(recommendations) < MIN_RECOMMENDATIONS:
        if not _has_title_containing(recommendations, "Schema") and not content.schema:
            recommendations.append(BASIC_SCHEMA)
        if not _has_title_containing(recommendations, "Freshness"):
            recommendations.append(CONTENT_UPDATES)

    for fallback in GENERIC_FALLBACKS:
        if len(recommendations) >= MIN_RECOMMENDATIONS:
            break
        recommendations.append(fallback)

    return recommendations
