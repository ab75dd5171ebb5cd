"""
Command-line interface for the keyword extraction engine.

Extracts ranked keywords and topic suggestions from a local file or a
web page, optionally enriched with stored metrics or DataForSEO data.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import EngineConfig
from .content_sources import ContentSourceError, fetch_url_content, load_content_file
from .dataforseo_client import DEFAULT_LOCATION, DataForSEOClient
from .engine import InputError, KeywordEngine
from .metrics_loader import MetricsLoadError, StaticMetricsProvider
from .models import ExtractionResult

console = Console()


@click.command()
@click.option(
    "--title",
    "-t",
    type=str,
    default=None,
    help="Content title. Overrides any title found in the source.",
)
@click.option(
    "--body-file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to an HTML, Markdown or text file with the content body.",
)
@click.option(
    "--source-url",
    type=str,
    help="URL of a page to fetch and analyze.",
)
@click.option(
    "--heading",
    "headings",
    multiple=True,
    help="Heading text to use for positional boosts (repeatable).",
)
@click.option(
    "--metrics-file",
    type=click.Path(exists=True, path_type=Path),
    help="CSV or Excel file with stored keyword metrics.",
)
@click.option(
    "--dataforseo",
    is_flag=True,
    default=False,
    help="Fetch metrics from DataForSEO (uses DATAFORSEO_LOGIN/DATAFORSEO_PASSWORD).",
)
@click.option(
    "--location",
    type=str,
    default=DEFAULT_LOCATION,
    help=f"DataForSEO location name (default: {DEFAULT_LOCATION}).",
)
@click.option(
    "--lightweight",
    is_flag=True,
    default=False,
    help="Use the lightweight preset (title boosts only, 15 keywords).",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(
    title: Optional[str],
    body_file: Optional[Path],
    source_url: Optional[str],
    headings: tuple[str, ...],
    metrics_file: Optional[Path],
    dataforseo: bool,
    location: str,
    lightweight: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    """
    SEO Keyword Engine - Extract ranked keywords from content.

    Reads content from a file or URL, extracts multi-word keyword
    candidates, ranks them and suggests article topics.

    Examples:

        seo-keywords --body-file post.html

        seo-keywords --source-url https://example.com/blog/post --dataforseo

        seo-keywords -t "Solar Panel Installation" --body-file body.md --metrics-file kw.csv
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if body_file and source_url:
        console.print("[red]Error:[/red] Provide only one of --body-file or --source-url")
        sys.exit(1)

    if metrics_file and dataforseo:
        console.print("[red]Error:[/red] Provide only one of --metrics-file or --dataforseo")
        sys.exit(1)

    try:
        # Step 1: Load content
        content_title, body = "", ""
        if body_file or source_url:
            with console.status("[bold green]Loading content..."):
                loaded = fetch_url_content(source_url) if source_url else load_content_file(body_file)
            content_title, body = loaded.title, loaded.body
            if verbose:
                console.print(f"  Loaded content from: {loaded.source}")
        if title is not None:
            content_title = title

        # Step 2: Choose a metrics provider
        provider = None
        if metrics_file:
            provider = StaticMetricsProvider.from_file(metrics_file)
            if verbose:
                console.print(f"  Loaded metrics for {len(provider.metrics)} keywords")
        elif dataforseo:
            provider = DataForSEOClient(location=location)
            if not provider.is_configured:
                console.print(
                    "[yellow]Warning:[/yellow] DataForSEO credentials not set, "
                    "continuing without metrics"
                )

        # Step 3: Run extraction
        config = EngineConfig.lightweight() if lightweight else EngineConfig()
        engine = KeywordEngine(metrics_provider=provider, config=config)
        with console.status("[bold green]Extracting keywords..."):
            result = engine.extract(content_title, body, list(headings) or None)

    except InputError as e:
        console.print(f"[red]Input error:[/red] {e}")
        sys.exit(1)
    except ContentSourceError as e:
        console.print(f"[red]Content loading error:[/red] {e}")
        sys.exit(1)
    except MetricsLoadError as e:
        console.print(f"[red]Metrics loading error:[/red] {e}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _display_result(result)


def _display_result(result: ExtractionResult) -> None:
    """Display keywords and topics as tables."""
    status = "enriched" if result.enriched else "structural signals only"
    console.print(Panel.fit(
        f"[bold blue]SEO Keyword Engine[/bold blue]\n"
        f"{len(result.keywords)} keywords ({status})",
        border_style="blue",
    ))

    if not result.keywords:
        console.print("[yellow]No keywords survived filtering.[/yellow]")
        return

    kw_table = Table(title="Ranked Keywords", show_header=True)
    kw_table.add_column("#", style="dim", justify="right")
    kw_table.add_column("Keyword", style="green")
    kw_table.add_column("Score", justify="right")
    kw_table.add_column("Source", style="cyan")
    kw_table.add_column("Volume", justify="right")
    kw_table.add_column("Difficulty", justify="right")
    kw_table.add_column("Intent")

    for i, kw in enumerate(result.keywords, start=1):
        metrics = kw.metrics
        kw_table.add_row(
            str(i),
            kw.keyword,
            f"{kw.score:.2f}",
            kw.source.value,
            str(metrics.search_volume) if metrics else "-",
            f"{metrics.difficulty:.0f}" if metrics else "-",
            metrics.intent.value if metrics else "-",
        )
    console.print(kw_table)

    if result.topics:
        topic_table = Table(title="Recommended Topics", show_header=True)
        topic_table.add_column("Topic", style="green")
        topic_table.add_column("Score", justify="right")
        for topic in result.topics:
            topic_table.add_row(topic.topic, f"{topic.score:.2f}")
        console.print(topic_table)


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
