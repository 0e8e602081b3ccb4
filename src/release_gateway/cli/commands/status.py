"""Status command for showing the effective gateway configuration."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from release_gateway import __version__
from release_gateway.core.config import ConfigError, load_config

console = Console()


def status(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the gateway config file.",
    ),
) -> None:
    """Show the configuration the server would start with."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    table = Table(title="Release Gateway")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("Version", __version__)
    table.add_row("Listen", f"{config.server.host}:{config.server.port}")
    table.add_row("Backend", f"{config.backend.base_url}{config.backend.service_path}")
    table.add_row("Backend auth", "bearer token" if config.backend.token else "none")
    table.add_row("Chart cache", config.charts.cache_dir)
    for repo in config.charts.repositories:
        table.add_row(f"Repository {repo.name}", repo.url)

    console.print(table)
    if not config.charts.repositories:
        console.print("\n[yellow]No chart repositories configured.[/yellow] Installs will fail.")
