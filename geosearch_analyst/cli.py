"""Typer CLI application for GeoSearch Analyst.

Provides commands for grounded keyword analysis, search history,
system status, and launching the dashboard.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from geosearch_analyst.exceptions import AnalysisError

console = Console()
app = typer.Typer(
    name="geosearch",
    help="GeoSearch Analyst -- grounded keyword volume, competition and SERP analysis.",
    add_completion=False,
    no_args_is_help=True,
)


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context."""
    return asyncio.run(coro)


def _get_app():
    """Lazy-import and return an initialised GeoSearchAnalyst."""
    from geosearch_analyst.app import GeoSearchAnalyst
    instance = GeoSearchAnalyst()
    instance.initialize()
    return instance


def _competition_style(label: str) -> str:
    lowered = label.lower()
    label = escape(label)
    if "high" in lowered:
        return "[red]" + label + "[/red]"
    if "medium" in lowered:
        return "[yellow]" + label + "[/yellow]"
    if "low" in lowered:
        return "[green]" + label + "[/green]"
    return label


def _print_result(result) -> None:
    """Pretty-print an AnalysisResult using Rich."""
    from geosearch_analyst.utils.helpers import format_number, truncate_text

    console.print(Panel(escape(result.summary), title="Market Insights", border_style="cyan"))

    if not result.metrics:
        console.print(
            "[yellow]No structured keyword data was found in the response. "
            "Try again or rephrase the keywords.[/yellow]"
        )
    else:
        table = Table(title="Keyword Metrics", show_header=True, header_style="bold magenta")
        table.add_column("Keyword", style="cyan", min_width=18)
        table.add_column("Volume")
        table.add_column("Chart", justify="right")
        table.add_column("Competition")
        table.add_column("Difficulty")
        table.add_column("Type")
        table.add_column("Quick Win", justify="center")
        table.add_column("Recommendation", max_width=50)
        for metric in result.metrics:
            table.add_row(
                escape(metric.keyword),
                escape(metric.search_volume.raw),
                format_number(metric.search_volume.magnitude),
                _competition_style(metric.competition.label),
                escape(metric.difficulty),
                metric.keyword_type.value,
                "[green]✔[/green]" if metric.is_quick_win else "",
                escape(truncate_text(metric.recommendation, 120)),
            )
        console.print(table)

        for metric in result.metrics:
            if metric.site_audit:
                console.print(f"[bold]{escape(metric.keyword)}[/bold] site audit: {escape(metric.site_audit)}")
            if metric.related_keywords:
                alts = ", ".join(
                    f"{r.keyword} [{r.search_volume.raw} | {r.competition.label}]"
                    for r in metric.related_keywords
                )
                console.print(f"[bold]{escape(metric.keyword)}[/bold] alternatives: {escape(alts)}")

    if result.grounding_chunks:
        console.print("\n[bold]Sources[/bold]")
        for chunk in result.grounding_chunks:
            console.print(f"  - {escape(chunk.title or chunk.uri)}: {escape(chunk.uri)}")


# ------------------------------------------------------------------
# analyze
# ------------------------------------------------------------------
@app.command()
def analyze(
    keywords: Optional[str] = typer.Argument(None, help="Comma- or newline-separated keywords."),
    location: str = typer.Option(..., "--location", "-l", help="Target location (e.g. 'New York, NY')."),
    website: Optional[str] = typer.Option(None, "--website", "-w", help="Your website, for a site audit."),
    keyword_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read keywords from a .txt or .csv file."),
    csv_path: Optional[Path] = typer.Option(None, "--csv", help="Write metrics to this CSV file."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write the full result to this JSON file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Analyze keywords for a location with Google Search grounding."""
    _setup_logging(verbose)

    if keyword_file is not None:
        from geosearch_analyst.utils.helpers import load_keywords_file
        try:
            keywords = load_keywords_file(keyword_file)
        except (OSError, ValueError) as exc:
            console.print("[red]✘[/red] " + str(exc))
            raise typer.Exit(code=1)
    if not keywords or not keywords.strip():
        console.print("[red]✘[/red] Provide keywords as an argument or with --file.")
        raise typer.Exit(code=1)

    console.print(Panel(f"[bold cyan]Keyword Analysis: {location}[/bold cyan]"))
    instance = _get_app()

    try:
        with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
            progress.add_task(description="Searching and analyzing keywords...", total=None)
            result = _run_async(instance.analyze(keywords, location, website))
    except AnalysisError as exc:
        console.print(Panel(escape(exc.message), title="Analysis Failed", border_style="red"))
        raise typer.Exit(code=1)

    _print_result(result)

    from geosearch_analyst.utils.export import export_to_csv, export_to_json
    if csv_path is not None:
        if result.metrics:
            path = export_to_csv(result, str(csv_path))
            console.print("[green]✔[/green] CSV written: " + path)
        else:
            console.print("[yellow]⚠[/yellow] No metrics to export; CSV not written.")
    if json_path is not None:
        path = export_to_json(result, str(json_path))
        console.print("[green]✔[/green] JSON written: " + path)


# ------------------------------------------------------------------
# history
# ------------------------------------------------------------------
@app.command()
def history(
    as_json: bool = typer.Option(False, "--json", help="Print history as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show recent searches, newest first."""
    _setup_logging(verbose)
    items = _get_app().history.list_recent()

    if as_json:
        console.print_json(json.dumps([item.to_dict() for item in items]))
        return
    if not items:
        console.print("No recent searches.")
        return

    from datetime import datetime
    table = Table(title="Recent Searches", show_header=True, header_style="bold magenta")
    table.add_column("When", style="dim")
    table.add_column("Keywords", style="cyan", max_width=50)
    table.add_column("Location")
    table.add_column("Website")
    for item in items:
        when = datetime.fromtimestamp(item.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
        table.add_row(when, escape(item.keywords), escape(item.location), escape(item.website or ""))
    console.print(table)


@app.command("clear-history")
def clear_history(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Delete all recent searches."""
    _setup_logging(verbose)
    removed = _get_app().history.clear()
    console.print("[green]✔[/green] Cleared " + str(removed) + " searches.")


# ------------------------------------------------------------------
# dashboard
# ------------------------------------------------------------------
@app.command()
def dashboard(
    port: int = typer.Option(8501, "--port", "-p", help="Streamlit server port."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Launch the Streamlit dashboard."""
    _setup_logging(verbose)
    console.print("[bold cyan]Launching dashboard on port " + str(port) + "...[/bold cyan]")
    import subprocess
    subprocess.run(
        ["streamlit", "run", "dashboard/app.py", "--server.port", str(port)],
        check=False,
    )


# ------------------------------------------------------------------
# status
# ------------------------------------------------------------------
@app.command()
def status(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show configuration, API key and database status."""
    _setup_logging(verbose)
    console.print(Panel("[bold cyan]System Status[/bold cyan]"))

    from geosearch_analyst.app import GeoSearchAnalyst
    component_status = GeoSearchAnalyst().get_status()

    table = Table(title="Component Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", min_width=20)
    table.add_column("Status", min_width=10)
    table.add_column("Details", max_width=50)
    for name, info in component_status.items():
        label = "[green]✔ OK[/green]" if info["ok"] else "[red]✘ Missing[/red]"
        table.add_row(name.replace("_", " ").title(), label, str(info["detail"])[:50])
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
