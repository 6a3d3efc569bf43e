"""Unit tests for content parser module."""
from __future__ import annotations

from dataclasses import FrozenInstanceError
from unittest.mock import patch

import pytest

from aeo_checker.parser.content_parser import HEADING_LEVELS, WebsiteContent, parse_content


class TestWebsiteContent:
    """Tests for the WebsiteContent snapshot."""

    def test_empty_has_all_heading_levels(self):
        content = WebsiteContent.empty("https://example.com")
        assert content.url == "https://example.com"
        assert set(content.headers) == set(HEADING_LEVELS)
        assert content.headings() == []
        assert content.schema == ()
        assert content.last_modified is None

    def test_is_immutable(self):
        content = WebsiteContent.empty()
        with pytest.raises(FrozenInstanceError):
            content.title = "changed"  # type: ignore[misc]

    def test_mappings_are_read_only(self):
        meta = {"author": "Dana"}
        content = WebsiteContent(url="", meta=meta)

        with pytest.raises(TypeError):
            content.meta["author"] = "Someone else"  # type: ignore[index]
        with pytest.raises(TypeError):
            content.headers["h1"] = ("Injected",)  # type: ignore[index]

        meta["author"] = "Changed later"
        assert content.meta == {"author": "Dana"}

    def test_headings_by_level(self):
        content = WebsiteContent(
            url="",
            headers={"h1": ("Top",), "h2": ("A", "B"), "h3": (), "h4": ("Deep",)},
        )
        assert content.headings() == ["Top", "A", "B", "Deep"]
        assert content.headings("h2") == ["A", "B"]
        assert content.headings("h1", "h4") == ["Top", "Deep"]


class TestParseContent:
    """Tests for parse_content extraction."""

    def test_extracts_title_and_meta(self, rich_content):
        assert rich_content.title == "What Is Answer Engine Optimization? A Practical Guide"
        assert rich_content.meta["author"] == "Dana Whitfield"
        assert rich_content.meta["keywords"].startswith("answer engine optimization")

    def test_meta_property_is_used_as_key(self):
        html = '<html><head><meta property="og:title" content="OG Title"></head><body></body></html>'
        content = parse_content(html)
        assert content.meta == {"og:title": "OG Title"}

    def test_extracts_headers_per_level(self, rich_content):
        assert rich_content.headers["h1"] == ("What is answer engine optimization?",)
        assert len(rich_content.headers["h2"]) == 4
        assert rich_content.headers["h3"] == (
            "Is AEO different from SEO?",
            "How often should content be updated?",
        )
        assert rich_content.headers["h4"] == ()

    def test_links_skip_fragments_and_javascript(self, rich_content):
        assert rich_content.links == (
            "https://en.wikipedia.org/wiki/Search_engine_optimization",
            "https://www.nist.gov/publications",
            "https://www.harvard.edu/about",
        )

    def test_json_ld_blocks_and_arrays(self, rich_content):
        types = [item["@type"] for item in rich_content.schema]
        assert types == ["FAQPage", "Article", "Organization", "HowTo", "BreadcrumbList"]

    def test_text_keeps_line_structure(self, rich_content):
        lines = [line.strip() for line in rich_content.text.splitlines() if line.strip()]
        assert "Why does AEO matter?" in lines
        assert "\n\n" in rich_content.text

    def test_text_excludes_head_scripts(self, rich_content):
        assert "@context" not in rich_content.text

    def test_malformed_json_ld_is_skipped_and_logged(self):
        html = """<html><head>
        <script type="application/ld+json">{"@type": "Article",}</script>
        <script type="application/ld+json">{"@type": "FAQPage"}</script>
        </head><body></body></html>"""

        with patch("aeo_checker.parser.content_parser.logger") as mock_logger:
            content = parse_content(html, "https://example.com")

        assert content.schema == ({"@type": "FAQPage"},)
        mock_logger.warning.assert_called_once()
        args, kwargs = mock_logger.warning.call_args
        assert args[0] == "jsonld_parse_failed"
        assert kwargs["block"] == 0
        assert kwargs["url"] == "https://example.com"

    def test_non_object_json_ld_ignored(self):
        html = '<html><head><script type="application/ld+json">"just a string"</script></head></html>'
        assert parse_content(html).schema == ()

    def test_last_modified_passed_through(self, minimal_html):
        content = parse_content(minimal_html, "https://example.com", last_modified="Wed, 01 May 2024 00:00:00 GMT")
        assert content.last_modified == "Wed, 01 May 2024 00:00:00 GMT"

    def test_empty_html(self):
        content = parse_content("", "https://example.com")
        assert content.title == ""
        assert content.text == ""
        assert content.links == ()
        assert content.headings() == []

    def test_malformed_html_does_not_raise(self):
        content = parse_content("<html><body><h1>Unclosed <p>para <div>", "https://example.com")
        assert content.headers["h1"]
