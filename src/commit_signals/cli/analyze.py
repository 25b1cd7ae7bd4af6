"""Analyze command — score an offline commit feed file."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..dashboard import build_dashboard
from ..exceptions import CommitSignalsError
from ..feed import load_feed
from ..logging_config import setup_logging
from ..runner import analyze_batch
from . import app
from ._common import console, emit, resolve_config


@app.command()
def analyze(
    feed_path: Path = typer.Argument(
        ...,
        metavar="FEED.json",
        help="JSON file listing repositories and their commits",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Repositories analyzed in parallel",
        min=1,
        max=32,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Score every repository in an offline feed file.

    [bold cyan]Examples:[/bold cyan]

      commit-signals analyze feed.json

      commit-signals analyze feed.json --json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(config=config, workers=workers, verbose=verbose, quiet=quiet)
        feed = load_feed(feed_path)
        logger.info(
            "Loaded %d repositories from %s (%d skipped)",
            len(feed.entries),
            feed_path,
            len(feed.failures),
        )

        batch = analyze_batch(feed.entries, workers=settings.workers, skipped=feed.failures)
        emit(build_dashboard(batch), json_output)

    except CommitSignalsError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)
