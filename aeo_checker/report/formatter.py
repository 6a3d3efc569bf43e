"""Report formatting utilities."""
from __future__ import annotations

import json
from typing import Literal

from rich.markup import escape

OutputFormat = Literal["cli", "json", "markdown"]

_BAND_LABELS = (
    (80, "Well optimized", "green"),
    (60, "Moderately optimized", "yellow"),
    (0, "Needs optimization", "red"),
)

_RECOMMENDATION_STYLES = {
    "critical": ("red", "✗"),
    "warning": ("yellow", "!"),
    "positive": ("green", "✓"),
}

_RECOMMENDATION_EMOJI = {"critical": "❌", "warning": "⚠️", "positive": "✅"}


def score_band(score: int) -> tuple[str, str]:
    """Return (label, color) for an overall score."""
    for threshold, label, color in _BAND_LABELS:
        if score >= threshold:
            return label, color
    return _BAND_LABELS[-1][1], _BAND_LABELS[-1][2]


def _bar_color(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def format_report(result: dict, output: OutputFormat = "cli") -> str:
    """Format an analysis result for output.

    Args:
        result: AnalysisResult.to_dict() payload
        output: Output format - 'cli', 'json', or 'markdown'

    Returns:
        Formatted string representation of the result
    """
    if output == "json":
        return _format_json(result)
    elif output == "markdown":
        return _format_markdown(result)
    else:
        return _format_cli(result)


def _format_json(result: dict) -> str:
    return json.dumps(result, ensure_ascii=False, indent=2)


def _format_cli(result: dict) -> str:
    """Format the result for terminal display with Rich-compatible markup."""
    lines = []
    url = result.get("url", "")
    total = result.get("overallScore", 0)
    label, color = score_band(total)

    lines.append("[bold cyan]AEO Analysis Report[/bold cyan]")
    lines.append(f"[dim]URL:[/dim] {escape(url)}")
    lines.append("")
    lines.append(f"[bold]AEO Score:[/bold] [{color}]{total}/100 ({label})[/{color}]")
    lines.append("")

    summary = result.get("summary", "")
    if summary:
        lines.append(escape(summary))
        lines.append("")

    categories = result.get("scoreSummary", [])
    if categories:
        lines.append("[bold]Categories:[/bold]")
        for category in categories:
            lines.append(f"  {category['category']:20} {category['score']}/100")
        lines.append("")

    lines.append("[bold]Score Breakdown:[/bold]")
    for item in result.get("scoreBreakdown", []):
        score = item.get("score", 0)
        bar_width = 20
        filled = int(bar_width * score / 100)
        bar = "█" * filled + "░" * (bar_width - filled)
        bar_color = _bar_color(score)
        lines.append(
            f"  {item['factor']:24} [{bar_color}]{bar}[/{bar_color}] "
            f"{score}/100 [dim](weight {item.get('weight', 0)}%)[/dim]"
        )
        lines.append(f"    [dim]{escape(item.get('details', ''))}[/dim]")
        if item.get("example"):
            lines.append(f"    [dim]Example:[/dim] {escape(item['example'])}")
    lines.append("")

    recommendations = result.get("recommendations", [])
    if recommendations:
        lines.append("[bold]Recommendations:[/bold]")
        for i, rec in enumerate(recommendations, 1):
            rec_color, symbol = _RECOMMENDATION_STYLES.get(rec.get("type", ""), ("white", "-"))
            lines.append(f"  {i}. [{rec_color}]{symbol} {rec['title']}[/{rec_color}]")
            lines.append(f"     {rec['description']}")
            lines.append(f"     [bold]Action:[/bold] {rec['action']}")

    return "\n".join(lines)


def _format_markdown(result: dict) -> str:
    """Format the result as Markdown."""
    lines = []
    url = result.get("url", "")
    total = result.get("overallScore", 0)
    label, _ = score_band(total)

    lines.append("# AEO Analysis Report")
    lines.append("")
    if url:
        lines.append(f"**URL:** {url}")
        lines.append("")

    lines.append("## AEO Score")
    lines.append("")
    lines.append(f"**{total}/100** ({label})")
    lines.append("")

    summary = result.get("summary", "")
    if summary:
        lines.append(summary)
        lines.append("")

    categories = result.get("scoreSummary", [])
    if categories:
        lines.append("### Categories")
        lines.append("")
        lines.append("| Category | Score |")
        lines.append("|----------|-------|")
        for category in categories:
            lines.append(f"| {category['category']} | {category['score']} |")
        lines.append("")

    lines.append("### Score Breakdown")
    lines.append("")
    lines.append("| Factor | Score | Weight | Details |")
    lines.append("|--------|-------|--------|---------|")
    for item in result.get("scoreBreakdown", []):
        details = item.get("details", "").replace("|", "\\|")
        lines.append(f"| {item['factor']} | {item['score']} | {item['weight']}% | {details} |")
    lines.append("")

    examples = [item for item in result.get("scoreBreakdown", []) if item.get("example")]
    if examples:
        lines.append("### Examples")
        lines.append("")
        for item in examples:
            lines.append(f"- **{item['factor']}:** {item['example']}")
        lines.append("")

    recommendations = result.get("recommendations", [])
    if recommendations:
        lines.append("## Recommendations")
        lines.append("")
        for i, rec in enumerate(recommendations, 1):
            emoji = _RECOMMENDATION_EMOJI.get(rec.get("type", ""), "")
            lines.append(f"{i}. {emoji} **{rec['title']}** ({rec['type']})")
            lines.append(f"   {rec['description']}")
            lines.append(f"   _Action: {rec['action']}_")
        lines.append("")

    return "\n".join(lines)
