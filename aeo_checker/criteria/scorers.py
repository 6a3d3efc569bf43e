"""Heuristic scorers for the six AEO criteria.

Every scorer is a pure function of a WebsiteContent snapshot and returns a
CriterionScore: an integer score clamped to 0-100 plus a short example
drawn from the page. Scorers are independent of each other and of order.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from aeo_checker.criteria.base import CriterionScore, clamp_score
from aeo_checker.parser.content_parser import WebsiteContent

QUESTION_BASED_CONTENT = "Question-Based Content"
STRUCTURED_DATA = "Structured Data"
CONTENT_CLARITY = "Content Clarity"
SEMANTIC_KEYWORDS = "Semantic Keywords"
CONTENT_FRESHNESS = "Content Freshness"
AUTHORITY_SIGNALS = "Authority Signals"

# Schema types that help answer engines understand a page
AEO_RELEVANT_TYPES = (
    "FAQPage", "HowTo", "Article", "WebPage", "Product", "ItemList",
    "BreadcrumbList", "Organization", "WebSite", "Person",
)

SEMANTIC_GROUPS = {
    "SEO": ("seo", "search engine", "ranking", "keyword", "backlink", "serp", "crawl", "index"),
    "Marketing": ("marketing", "campaign", "audience", "conversion", "funnel", "lead", "brand", "strategy"),
    "Technology": ("technology", "software", "code", "development", "programming", "app", "website", "data"),
    "Business": ("business", "company", "startup", "entrepreneur", "profit", "revenue", "service", "product"),
    "E-commerce": ("shop", "store", "product", "price", "discount", "shipping", "cart", "purchase"),
}

FRESHNESS_TERMS = ("new", "update", "recent", "latest", "current year", "now", "today")

# Matched against hostname labels ("gov", "mit") or whole domains ("wikipedia.org")
AUTHORITY_DOMAINS = (
    "wikipedia.org", "gov", "edu", "harvard", "stanford", "mit",
    "bbc", "nytimes", "reuters", "bloomberg", "wsj", "economist",
)

EXPERTISE_MARKERS = (
    "phd", "professor", "expert", "specialist", "professional",
    "certified", "licensed", "years of experience", "research",
)

_FAQ_MENTION = re.compile(r"faq|frequently asked questions|common questions", re.IGNORECASE)
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_LINE_BREAK = re.compile(r"\r?\n")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_CONTENT_DATE = re.compile(
    r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]* (\d{1,2}),? (\d{4})\b",
    re.IGNORECASE,
)
_BYLINE = re.compile(r"\b(?:[Bb]y|[Ww]ritten by|[Aa]uthor:)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)")
_CITATION_TEXT = re.compile(r"\b(?:source|reference):\s*([^\n]+)", re.IGNORECASE)

_MONTHS = {
    name: index
    for index, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"),
        start=1,
    )
}


def _clean_text(text: str) -> str:
    return " ".join(text.split())


def _excerpt(text: str, limit: int = 120) -> str:
    text = _clean_text(text)
    if len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


def _word_pattern(term: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


def _type_names(item: dict[str, Any]) -> list[str]:
    value = item.get("@type")
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [v for v in value if isinstance(v, str)]
    return []


def _iter_schema_objects(schema: Iterable[dict[str, Any]]) -> Iterable[dict[str, Any]]:
    """Yield top-level schema objects followed by their @graph members."""
    for item in schema:
        if not isinstance(item, dict):
            continue
        yield item
        graph = item.get("@graph")
        if isinstance(graph, list):
            for node in graph:
                if isinstance(node, dict):
                    yield node


def collect_schema_types(schema: Iterable[dict[str, Any]]) -> list[str]:
    """Distinct @type values in first-seen order."""
    types: list[str] = []
    for item in _iter_schema_objects(schema):
        for name in _type_names(item):
            if name not in types:
                types.append(name)
    return types


def _find_schema_object(schema: Iterable[dict[str, Any]], type_name: str) -> dict[str, Any] | None:
    for item in _iter_schema_objects(schema):
        if type_name in _type_names(item):
            return item
    return None


def _faq_questions(faq: dict[str, Any]) -> list[str]:
    entities = faq.get("mainEntity") or []
    if isinstance(entities, dict):
        entities = [entities]
    questions = []
    for entity in entities:
        if isinstance(entity, dict) and isinstance(entity.get("name"), str):
            questions.append(_clean_text(entity["name"]))
    return questions


def _tier_bonus(count: float, tiers: tuple[tuple[float, int], ...]) -> int:
    """Return the bonus of the first (threshold, bonus) tier that count reaches."""
    for threshold, bonus in tiers:
        if count >= threshold:
            return bonus
    return 0


# === Question-Based Content ===


def _question_answer_pairs(text: str) -> list[tuple[str, str]]:
    lines = [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]
    pairs = []
    for question, answer in zip(lines, lines[1:]):
        if question.endswith("?") and len(answer) > 20:
            pairs.append((question, answer))
    return pairs


def score_question_based_content(content: WebsiteContent, **context) -> CriterionScore:
    header_questions = [h for h in content.headings() if h.strip().endswith("?")]
    faq_schema = _find_schema_object(content.schema, "FAQPage")
    has_faq_section = _FAQ_MENTION.search(content.text) is not None
    qa_pairs = _question_answer_pairs(content.text)

    score = 50
    score += _tier_bonus(len(header_questions), ((6, 15), (3, 10), (1, 5)))
    if faq_schema is not None:
        score += 20
    if has_faq_section:
        score += 10
    score += _tier_bonus(len(qa_pairs), ((6, 15), (3, 10), (1, 5)))

    if header_questions:
        example = f'Header question: "{_excerpt(header_questions[0])}"'
    elif qa_pairs:
        question, answer = qa_pairs[0]
        example = f'Q: "{_excerpt(question)}" A: "{_excerpt(answer, 100)}"'
    elif faq_schema is not None:
        questions = _faq_questions(faq_schema)
        example = "FAQ schema markup present"
        if questions:
            example += f': "{_excerpt(questions[0])}"'
    else:
        example = "No question-based content found"

    return CriterionScore(clamp_score(score), example)


# === Structured Data ===


def score_structured_data(content: WebsiteContent, **context) -> CriterionScore:
    if not content.schema:
        return CriterionScore(30, "No schema markup found")

    schema_types = collect_schema_types(content.schema)
    relevant = [name for name in AEO_RELEVANT_TYPES if name in schema_types]

    score = 40
    score += _tier_bonus(len(schema_types), ((5, 15), (3, 10), (1, 5)))
    score += _tier_bonus(len(relevant), ((5, 25), (3, 15), (1, 10)))
    if "FAQPage" in schema_types:
        score += 10
    if "HowTo" in schema_types:
        score += 10

    first = content.schema[0]
    first_types = _type_names(first)
    if first_types:
        parts = [f"Type: {', '.join(first_types)}"]
        if isinstance(first.get("name"), str) and first["name"].strip():
            parts.append(f'Name: "{_excerpt(first["name"], 80)}"')
        if "FAQPage" in first_types:
            questions = _faq_questions(first)
            if questions:
                parts.append(f'Sample question: "{_excerpt(questions[0], 100)}"')
        example = ", ".join(parts)
    elif schema_types:
        example = f"Schema types found: {', '.join(schema_types)}"
    else:
        example = "Schema markup present without @type declarations"

    return CriterionScore(clamp_score(score), example)


# === Content Clarity ===


def score_content_clarity(content: WebsiteContent, **context) -> CriterionScore:
    paragraphs = [p for p in _PARAGRAPH_BREAK.split(content.text) if p.strip()]
    avg_paragraph_length = sum(len(p) for p in paragraphs) / (len(paragraphs) or 1)

    soup = BeautifulSoup(content.html, "lxml")
    list_items = [
        _clean_text(li.get_text(" ", strip=True))
        for li in soup.select("ul li, ol li")
    ]
    has_lists = bool(list_items)
    has_emphasis = soup.find(["strong", "b", "em", "i"]) is not None

    headings = content.headings()
    text_length = len(content.text)
    headings_ratio = (len(headings) * 1000 / text_length) if text_length else 0.0

    score = 50
    if avg_paragraph_length < 400:
        score += 15
    elif avg_paragraph_length < 800:
        score += 10
    elif avg_paragraph_length < 1200:
        score += 5
    if has_lists:
        score += 10
    if 2 < headings_ratio < 10:
        score += 15
    elif headings_ratio > 0.5:
        score += 10
    if has_emphasis:
        score += 10
    score = clamp_score(score)

    items = [item for item in list_items if item][:3]
    chain = [content.headers[level][0] for level in ("h1", "h2", "h3", "h4") if content.headers.get(level)]
    readable = sorted(
        (_clean_text(p) for p in paragraphs if len(_clean_text(p)) >= 40),
        key=len,
    )
    if items:
        example = "List items: " + ", ".join(f'"{_excerpt(item, 60)}"' for item in items)
    elif len(chain) >= 2:
        example = "Heading structure: " + " > ".join(f'"{_excerpt(h, 50)}"' for h in chain)
    elif readable:
        example = f'Concise paragraph: "{_excerpt(readable[0], 150)}"'
    elif score >= 80:
        example = "Content is well formatted for quick scanning"
    elif score >= 60:
        example = "Content formatting is adequate but could be easier to scan"
    else:
        example = "Content lacks lists, headings and emphasis that aid scanning"

    return CriterionScore(score, example)


# === Semantic Keywords ===


def score_semantic_keywords(content: WebsiteContent, **context) -> CriterionScore:
    matched_groups = 0
    total_matches = 0
    best_group = ""
    best_terms: list[str] = []

    for group, terms in SEMANTIC_GROUPS.items():
        present = []
        for term in terms:
            occurrences = len(_word_pattern(term).findall(content.text))
            if occurrences:
                present.append(term)
                total_matches += occurrences
        if len(present) >= 3:
            matched_groups += 1
        if len(present) > len(best_terms):
            best_group, best_terms = group, present

    score = 40
    score += _tier_bonus(matched_groups, ((3, 25), (2, 15), (1, 10)))
    score += _tier_bonus(total_matches, ((20, 25), (10, 15), (5, 10)))
    keywords = content.meta.get("keywords", "")
    if len(keywords) > 10:
        score += 10
    score = clamp_score(score)

    if keywords.strip():
        example = f'Meta keywords: "{_excerpt(keywords, 100)}"'
    elif best_terms:
        example = f"Related terms ({best_group}): {', '.join(best_terms)}"
    elif content.title:
        example = f'Page title: "{_excerpt(content.title, 100)}"'
    elif score >= 60:
        example = "Related terms appear throughout the content"
    else:
        example = "Few related terms or contextual keywords found"

    return CriterionScore(score, example)


# === Content Freshness ===


def _parse_http_date(value: str) -> datetime | None:
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _content_dates(text: str) -> list[tuple[datetime, str]]:
    dates = []
    for match in _CONTENT_DATE.finditer(text):
        month = _MONTHS[match.group(1).lower()[:3]]
        try:
            parsed = datetime(int(match.group(3)), month, int(match.group(2)), tzinfo=UTC)
        except ValueError:
            continue
        dates.append((parsed, match.group(0)))
    return dates


def _freshness_for_age(age_days: float) -> int:
    if age_days < 30:
        return 90
    if age_days < 90:
        return 80
    if age_days < 180:
        return 70
    if age_days < 365:
        return 60
    return 40


def score_content_freshness(
    content: WebsiteContent, *, now: datetime | None = None, **context
) -> CriterionScore:
    now = now or datetime.now(UTC)

    anchor: tuple[datetime, str] | None = None
    from_header = False
    dates = _content_dates(content.text)
    if dates:
        anchor = max(dates, key=lambda item: item[0])

    if content.last_modified:
        header_date = _parse_http_date(content.last_modified)
        if header_date is not None and (anchor is None or header_date > anchor[0]):
            anchor = (header_date, content.last_modified)
            from_header = True

    if anchor is None:
        score = 40
    else:
        age_days = (now - anchor[0]).total_seconds() / 86400
        score = _freshness_for_age(age_days)

    first_term_match = None
    matched_terms = 0
    for term in FRESHNESS_TERMS:
        match = _word_pattern(term).search(content.text)
        if match:
            matched_terms += 1
            if first_term_match is None:
                first_term_match = match
    score += _tier_bonus(matched_terms, ((4, 10), (2, 5)))

    if anchor is not None:
        example = f"Most recent date: {anchor[1]}"
        if from_header:
            example += " (from Last-Modified header)"
    elif first_term_match is not None:
        start = max(first_term_match.start() - 40, 0)
        end = min(first_term_match.end() + 40, len(content.text))
        example = f'Freshness indicator: "...{_clean_text(content.text[start:end])}..."'
    else:
        example = "No date indicators found"

    return CriterionScore(clamp_score(score), example)


# === Authority Signals ===


def is_authority_link(link: str) -> bool:
    """True when the link's host belongs to an authority domain."""
    try:
        host = (urlparse(link).hostname or "").lower()
    except ValueError:
        # Malformed hrefs such as "http://[::1"
        return False
    if not host:
        return False
    labels = host.split(".")
    for domain in AUTHORITY_DOMAINS:
        if "." in domain:
            if host == domain or host.endswith("." + domain):
                return True
        elif domain in labels:
            return True
    return False


def authority_links(links: Iterable[str]) -> list[str]:
    return [link for link in links if is_authority_link(link)]


def _author_name(content: WebsiteContent) -> str:
    for item in _iter_schema_objects(content.schema):
        author = item.get("author")
        if isinstance(author, list) and author:
            author = author[0]
        if isinstance(author, dict) and isinstance(author.get("name"), str):
            return _clean_text(author["name"])
        if isinstance(author, str) and author.strip():
            return _clean_text(author)
        if "Person" in _type_names(item) and isinstance(item.get("name"), str):
            return _clean_text(item["name"])

    if content.meta.get("author", "").strip():
        return _clean_text(content.meta["author"])

    match = _BYLINE.search(content.text)
    return match.group(1) if match else ""


def _citation_text(content: WebsiteContent) -> str:
    soup = BeautifulSoup(content.html, "lxml")
    cite = soup.find("cite")
    if cite is not None and cite.get_text(strip=True):
        return _clean_text(cite.get_text(" ", strip=True))
    match = _CITATION_TEXT.search(content.text)
    return _clean_text(match.group(1)) if match else ""


def score_authority_signals(content: WebsiteContent, **context) -> CriterionScore:
    html_lower = content.html.lower()
    has_person_schema = _find_schema_object(content.schema, "Person") is not None
    has_author_info = "author" in content.html or "byline" in content.html or has_person_schema
    has_citations = "<cite" in html_lower or "source:" in html_lower or "reference:" in html_lower

    outbound_authority = authority_links(content.links)

    sentences = [s for s in _SENTENCE_BREAK.split(content.text) if s.strip()]
    expertise_matches = 0
    expertise_sentence = ""
    for marker in EXPERTISE_MARKERS:
        pattern = _word_pattern(marker)
        for sentence in sentences:
            if pattern.search(sentence):
                expertise_matches += 1
                expertise_sentence = expertise_sentence or sentence
                break

    score = 40
    if has_author_info:
        score += 15
    if has_citations:
        score += 15
    score += _tier_bonus(len(outbound_authority), ((5, 20), (3, 15), (1, 10)))
    score += _tier_bonus(expertise_matches, ((3, 10), (1, 5)))

    author = _author_name(content) if has_author_info else ""
    citation = _citation_text(content) if has_citations else ""
    if author:
        example = f"Author: {_excerpt(author, 80)}"
    elif outbound_authority:
        example = f"Authority link: {outbound_authority[0]}"
    elif citation:
        example = f'Citation: "{_excerpt(citation)}"'
    elif expertise_sentence:
        example = f'Expertise mention: "{_excerpt(expertise_sentence)}"'
    else:
        example = "No clear authority signals found"

    return CriterionScore(clamp_score(score), example)
