"""Shared test fixtures and configuration."""
from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from aeo_checker.parser.content_parser import WebsiteContent, parse_content

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "html"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to the HTML fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def fixed_now() -> datetime:
    """Reference time for freshness scoring (12 days after the rich page's date)."""
    return datetime(2024, 6, 1, tzinfo=UTC)


@pytest.fixture
def mock_url() -> str:
    """Return a mock URL for testing."""
    return "https://example.com/aeo-guide"


@pytest.fixture
def rich_html() -> str:
    """Page with FAQ content, schema, lists, dates and citations."""
    return (FIXTURES_DIR / "aeo_rich.html").read_text(encoding="utf-8")


@pytest.fixture
def thin_html() -> str:
    """Single block of marketing copy with no AEO signals."""
    return (FIXTURES_DIR / "thin.html").read_text(encoding="utf-8")


@pytest.fixture
def rich_content(rich_html: str, mock_url: str) -> WebsiteContent:
    return parse_content(rich_html, mock_url)


@pytest.fixture
def thin_content(thin_html: str) -> WebsiteContent:
    return parse_content(thin_html, "https://example.com/")


@pytest.fixture
def minimal_html() -> str:
    """Return minimal HTML for edge case testing."""
    return """<!DOCTYPE html>
<html>
<head><title>Minimal</title></head>
<body><p>Content</p></body>
</html>"""


@pytest.fixture
def empty_content() -> WebsiteContent:
    return WebsiteContent.empty()


@pytest.fixture
def make_fetcher():
    """Build a fetcher that serves pre-built content by URL."""

    def _make(pages: dict[str, WebsiteContent]):
        calls: list[str] = []

        def fetcher(url: str) -> WebsiteContent:
            calls.append(url)
            return pages[url]

        fetcher.calls = calls
        return fetcher

    return _make
