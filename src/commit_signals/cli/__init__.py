"""CLI entry point — registers all subcommands."""

import typer

from ._common import console

app = typer.Typer(
    name="commit-signals",
    help="Commit Signals - behavioral scoring of repository commit history",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    from .. import __version__

    if version:
        console.print(f"[bold cyan]Commit Signals[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .fetch import fetch as _fetch  # noqa: F401, E402


def main() -> None:
    app()
