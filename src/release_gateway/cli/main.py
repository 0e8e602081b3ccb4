"""Main CLI entry point using Typer."""

from __future__ import annotations

import typer
from rich.console import Console

from release_gateway import __version__
from release_gateway.cli.commands import serve, status
from release_gateway.logging.config import configure_logging

app = typer.Typer(
    name="release-gateway",
    help="REST gateway for chart release management.",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"release-gateway version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
) -> None:
    """Release Gateway - REST access to chart releases."""
    ctx.obj = {"verbose": verbose, "debug": debug}
    configure_logging(verbose=verbose, debug=debug, log_to_file=False)


app.command()(serve.serve)
app.command()(status.status)


if __name__ == "__main__":
    app()
