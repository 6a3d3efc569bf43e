"""Content parsing utilities."""
from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import structlog
from bs4 import BeautifulSoup

logger = structlog.get_logger(__name__)

HEADING_LEVELS = ("h1", "h2", "h3", "h4")


@dataclass(frozen=True)
class WebsiteContent:
    """Immutable snapshot of a fetched page.

    Attributes:
        url: Address the page was fetched from
        title: Document title
        html: Raw HTML as returned by the server
        text: Body text with the source whitespace preserved
        meta: <meta> name/property -> content
        headers: Heading text grouped by level (h1..h4)
        links: Outbound hrefs, fragment-only and javascript: links excluded
        schema: Parsed JSON-LD objects
        last_modified: Raw Last-Modified response header, if any
    """
    url: str
    title: str = ""
    html: str = ""
    text: str = ""
    meta: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: {level: () for level in HEADING_LEVELS}
    )
    links: tuple[str, ...] = ()
    schema: tuple[dict[str, Any], ...] = ()
    last_modified: str | None = None

    def __post_init__(self):
        # Read-only views over private copies
        object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def empty(cls, url: str = "") -> WebsiteContent:
        return cls(url=url)

    def headings(self, *levels: str) -> list[str]:
        """Return heading texts for the given levels (all levels by default)."""
        selected = levels or HEADING_LEVELS
        return [text for level in selected for text in self.headers.get(level, ())]


def _clean_text(text: str) -> str:
    return " ".join(text.split())


def _extract_meta(soup: BeautifulSoup) -> dict[str, str]:
    meta = {}
    for tag in soup.find_all("meta"):
        name = tag.get("name") or tag.get("property")
        content = tag.get("content")
        if name and content:
            meta[name] = content
    return meta


def _extract_headers(soup: BeautifulSoup) -> dict[str, tuple[str, ...]]:
    return {
        level: tuple(_clean_text(tag.get_text()) for tag in soup.find_all(level))
        for level in HEADING_LEVELS
    }


def _extract_links(soup: BeautifulSoup) -> tuple[str, ...]:
    links = []
    for anchor in soup.find_all("a", href=True):
        href = anchor.get("href", "")
        if not href or href.startswith("#") or href.startswith("javascript:"):
            continue
        links.append(href)
    return tuple(links)


def _extract_json_ld(soup: BeautifulSoup, url: str) -> tuple[dict[str, Any], ...]:
    """Parse each JSON-LD block on its own; malformed blocks are skipped."""
    schema: list[dict[str, Any]] = []
    for index, script in enumerate(soup.find_all("script", attrs={"type": "application/ld+json"})):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("jsonld_parse_failed", url=url, block=index, error=str(exc))
            continue

        if isinstance(data, dict):
            schema.append(data)
        elif isinstance(data, list):
            schema.extend(item for item in data if isinstance(item, dict))
    return tuple(schema)


def parse_content(html: str, url: str = "", last_modified: str | None = None) -> WebsiteContent:
    """Parse fetched HTML into a WebsiteContent snapshot."""
    soup = BeautifulSoup(html or "", "lxml")

    title = _clean_text(soup.title.get_text()) if soup.title else ""
    # Body text keeps its line structure; paragraph and Q&A heuristics depend on it
    text = soup.body.get_text() if soup.body else ""

    return WebsiteContent(
        url=url,
        title=title,
        html=html or "",
        text=text,
        meta=_extract_meta(soup),
        headers=_extract_headers(soup),
        links=_extract_links(soup),
        schema=_extract_json_ld(soup, url),
        last_modified=last_modified,
    )
