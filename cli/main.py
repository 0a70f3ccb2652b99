"""WikiGraph CLI — entry-point for conversion and graph operations.

Usage:
    python cli/main.py --help

Commands:
    convert     → validate, fetch, extract and write a page to Neo4j
    extract     → validate, fetch and extract only (no database)
    graph init  → create the graph constraints
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from wikigraph.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from wikigraph.config import settings
from wikigraph.convert import ConversionFailure, convert_page, extract_from_url
from wikigraph.errors import ConversionError, Stage
from wikigraph.graph import close_driver, get_driver, init_schema
from wikigraph.logging_setup import configure_logging

app = typer.Typer(
    name="wikigraph",
    help="WikiGraph CLI: turn Wikipedia articles into Neo4j graph data.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default: LOG_LEVEL or INFO)."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# Conversion commands
# ---------------------------------------------------------------------------
@app.command("convert")
def convert(
    url: str = typer.Option(..., help="Wikipedia article URL (https)."),
) -> None:
    """Convert a Wikipedia article into Page nodes and LINKS_TO relationships."""
    driver = get_driver()
    typer.echo(f"[convert] Converting {url!r} …")
    try:
        outcome = convert_page(url, driver)
    finally:
        close_driver(driver)

    if isinstance(outcome, ConversionFailure):
        typer.echo(f"[convert] {outcome.stage.value} failed: {outcome.message}", err=True)
        raise typer.Exit(2 if outcome.stage is Stage.VALIDATION else 1)

    typer.echo(f"[convert] Title                 : {outcome.title or '(none)'}")
    typer.echo(f"[convert] Links                 : {outcome.link_count}")
    typer.echo(f"[convert] Nodes created         : {outcome.nodes_created}")
    typer.echo(f"[convert] Relationships created : {outcome.relationships_created}")


@app.command("extract")
def extract(
    url: str = typer.Option(..., help="Wikipedia article URL (https)."),
) -> None:
    """Print the title and internal article links of a page without writing anything."""
    try:
        page = extract_from_url(url)
    except ConversionError as exc:
        typer.echo(f"[extract] {exc.stage.value} failed: {exc.message}", err=True)
        raise typer.Exit(2 if exc.stage is Stage.VALIDATION else 1)

    typer.echo(f"[extract] Title : {page.title or '(none)'}")
    typer.echo(f"[extract] Links : {len(page.links)}")
    for link in page.links:
        typer.echo(f"  {link}")


# ---------------------------------------------------------------------------
# Graph commands
# ---------------------------------------------------------------------------
graph_app = typer.Typer(help="Neo4j graph operations.", no_args_is_help=True)
app.add_typer(graph_app, name="graph")


@graph_app.command("init")
def graph_init() -> None:
    """Create the Page.url uniqueness constraint (safe to run repeatedly)."""
    driver = get_driver()
    try:
        init_schema(driver)
    finally:
        close_driver(driver)
    typer.echo(f"[graph init] Constraints ready at {settings.neo4j_uri}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
