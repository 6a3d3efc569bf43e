"""CLI commands."""
from __future__ import annotations

import traceback
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from aeo_checker import __version__
from aeo_checker.analysis.analyzer import analyze
from aeo_checker.analysis.models import AnalysisOptions, AnalysisResult, ContentFocus, Industry
from aeo_checker.config.logging import setup_logging
from aeo_checker.fetcher.html_fetcher import FetchError
from aeo_checker.report.formatter import OutputFormat, format_report, score_band

app = typer.Typer(
    add_completion=False,
    help="AEO Checker - Analyze web pages for Answer Engine Optimization",
)
console = Console()

PASSING_SCORE = 60


def _run_analysis(target: str, options: AnalysisOptions, verbose: bool) -> AnalysisResult:
    """Run the analyzer, turning failures into a printed error and exit code 1."""
    try:
        with console.status("[bold blue]Analyzing page...", spinner="dots"):
            return analyze(target, options)
    except ValueError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except FetchError as e:
        console.print(f"\n[red]Fetch Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"\n[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print(traceback.format_exc())
        raise typer.Exit(1)


@app.command()
def run(
    target: str = typer.Argument(..., help="URL to analyze"),
    competitor: str | None = typer.Option(
        None,
        "--competitor",
        "-c",
        help="Competitor URL to compare against",
    ),
    industry: str | None = typer.Option(
        None,
        "--industry",
        "-i",
        help="Industry: " + ", ".join(i.value for i in Industry),
    ),
    content_focus: str | None = typer.Option(
        None,
        "--content-focus",
        "-f",
        help="Content focus: " + ", ".join(f.value for f in ContentFocus),
    ),
    depth: str = typer.Option(
        "standard",
        "--depth",
        "-d",
        help="Analysis depth: standard or advanced",
    ),
    output: str = typer.Option(
        "cli",
        "--output",
        "-o",
        help="Output format: cli, json, markdown",
    ),
    save: str | None = typer.Option(
        None,
        "--save",
        "-s",
        help="Save report to file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed analysis information",
    ),
) -> None:
    """Analyze a URL for AEO (Answer Engine Optimization).

    Examples:
        aeo-checker run https://example.com
        aeo-checker run https://example.com -o json
        aeo-checker run https://example.com --industry finance -o markdown -s report.md
    """
    if output not in ("cli", "json", "markdown"):
        console.print(f"[red]Error:[/red] Invalid output format '{output}'. Use cli, json, or markdown.")
        raise typer.Exit(1)
    if depth not in ("standard", "advanced"):
        console.print(f"[red]Error:[/red] Invalid depth '{depth}'. Use standard or advanced.")
        raise typer.Exit(1)

    output_format: OutputFormat = output  # type: ignore
    setup_logging(level="DEBUG" if verbose else "WARNING")

    console.print(Panel.fit(
        f"[bold cyan]AEO Checker[/bold cyan]\n[dim]Analyzing:[/dim] {target}",
        border_style="cyan",
    ))

    options = AnalysisOptions(
        competitor_url=competitor,
        industry=industry,
        content_focus=content_focus,
        analysis_depth=depth,
    )
    result = _run_analysis(target, options, verbose)

    if verbose:
        console.print(f"[dim]Scored {len(result.score_breakdown)} criteria, "
                      f"{len(result.recommendations)} recommendations[/dim]")

    report = format_report(result.to_dict(), output_format)

    if save:
        save_path = Path(save)
        save_path.write_text(report, encoding="utf-8")
        console.print(f"\n[green]Report saved to:[/green] {save_path}")
    else:
        console.print("")
        if output_format == "cli":
            console.print(report)
        else:
            console.print(report, markup=False)

    if result.overall_score < PASSING_SCORE:
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]AEO Checker[/bold] v{__version__}")
    console.print("[dim]Answer Engine Optimization analyzer[/dim]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    console.print(f"[bold cyan]AEO Checker API[/bold cyan] on http://{host}:{port}/api/docs")
    uvicorn.run("app.main:app", host=host, port=port)


@app.command()
def check(
    target: str = typer.Argument(..., help="URL to quick-check"),
) -> None:
    """Quick check - returns only the AEO score and band.

    Example:
        aeo-checker check https://example.com
    """
    setup_logging(level="WARNING")
    result = _run_analysis(target, AnalysisOptions(), verbose=False)

    label, color = score_band(result.overall_score)
    console.print(f"[{color}]{label}[/{color}] ({result.overall_score}/100) - {target}")

    if result.overall_score < PASSING_SCORE:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
