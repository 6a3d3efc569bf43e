"""Unit tests for the analyze() entry point."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from aeo_checker.analysis.analyzer import analyze
from aeo_checker.analysis.models import AnalysisOptions
from aeo_checker.criteria import STRUCTURED_DATA
from aeo_checker.fetcher.html_fetcher import FetchError


class TestAnalyze:
    """Tests for fetching and scoring through analyze()."""

    def test_fetches_and_scores(self, make_fetcher, rich_content, mock_url, fixed_now):
        fetcher = make_fetcher({mock_url: rich_content})

        result = analyze(mock_url, fetcher=fetcher, now=fixed_now)

        assert fetcher.calls == [mock_url]
        assert result.url == mock_url
        assert len(result.score_breakdown) == 6
        assert result.overall_score >= 80

    def test_competitor_is_fetched(self, make_fetcher, thin_content, rich_content, mock_url):
        fetcher = make_fetcher({
            "https://example.com/": thin_content,
            mock_url: rich_content,
        })
        options = AnalysisOptions(competitor_url=mock_url)

        result = analyze("https://example.com/", options, fetcher=fetcher)

        assert fetcher.calls == ["https://example.com/", mock_url]
        structured = next(i for i in result.score_breakdown if i.factor == STRUCTURED_DATA)
        assert "Your competitor performs better in this area." in structured.details

    def test_fetch_error_propagates(self):
        def failing(url):
            raise FetchError("HTTP 503: Service Unavailable", url=url, status_code=503)

        with pytest.raises(FetchError) as exc_info:
            analyze("https://down.example.com", fetcher=failing)
        assert exc_info.value.status_code == 503

    def test_invalid_url_propagates(self):
        def rejecting(url):
            raise ValueError("Only http and https URLs are supported")

        with pytest.raises(ValueError, match="Only http and https"):
            analyze("ftp://example.com", fetcher=rejecting)

    def test_competitor_fetch_error_propagates(self, thin_content):
        def fetcher(url):
            if url == "https://example.com/":
                return thin_content
            raise FetchError("HTTP 404: Not Found", url=url, status_code=404)

        options = AnalysisOptions(competitor_url="https://missing.example.com")
        with pytest.raises(FetchError) as exc_info:
            analyze("https://example.com/", options, fetcher=fetcher)
        assert exc_info.value.url == "https://missing.example.com"

    def test_logs_start_and_completion(self, make_fetcher, thin_content):
        fetcher = make_fetcher({"https://example.com/": thin_content})
        with patch("aeo_checker.analysis.analyzer.logger") as mock_logger:
            analyze("https://example.com/", fetcher=fetcher)

        bound = mock_logger.bind.return_value
        events = [call.args[0] for call in bound.info.call_args_list]
        assert events == ["analysis_started", "analysis_completed"]
