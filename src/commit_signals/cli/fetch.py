"""Fetch command — pull commit history from a hosting platform, then score it."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape

from ..dashboard import build_dashboard
from ..exceptions import CommitSignalsError
from ..logging_config import setup_logging
from ..models import Platform
from ..platforms import create_client
from ..runner import fetch_and_analyze
from . import app
from ._common import console, emit, resolve_config


@app.command()
def fetch(
    platform: Optional[str] = typer.Option(
        None,
        "--platform",
        "-p",
        help="Hosting platform",
        click_type=click.Choice([p.value for p in Platform], case_sensitive=False),
    ),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Analyze this user's repositories"),
    org: Optional[str] = typer.Option(
        None, "--org", "-o", help="Analyze this organization's repositories"
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="API token (or set COMMIT_SIGNALS_TOKEN)",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="API root for self-hosted instances",
    ),
    sample: Optional[int] = typer.Option(
        None,
        "--sample",
        "-n",
        help="Number of repositories to analyze",
        min=1,
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
        help="Parallel repository fetches",
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
    Fetch recent commits from GitHub, GitLab, Bitbucket or Azure DevOps and score them.

    [bold cyan]Examples:[/bold cyan]

      commit-signals fetch --platform github --user octocat

      commit-signals fetch -p azure --org contoso --token $PAT --json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            platform=platform.lower() if platform else None,
            username=user,
            organization=org,
            token=token,
            base_url=base_url,
            sample_size=sample,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
        client = create_client(settings)
        batch = fetch_and_analyze(client, settings)
        emit(build_dashboard(batch), json_output)

    except CommitSignalsError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)
