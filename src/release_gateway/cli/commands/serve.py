"""Serve command: run the REST gateway under uvicorn."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer
import uvicorn
from rich.console import Console
from rich.markup import escape

from release_gateway.api.app import create_app
from release_gateway.core.config import ConfigError, load_config
from release_gateway.logging.config import configure_logging

console = Console(stderr=True)
logger = structlog.get_logger()


def serve(
    ctx: typer.Context,
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the gateway config file (default: $RG_CONFIG or ./release-gateway.yaml).",
    ),
    host: str | None = typer.Option(None, "--host", help="Override the listen address."),
    port: int | None = typer.Option(None, "--port", "-p", help="Override the listen port."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Write console logs as JSON."),
) -> None:
    """Run the release gateway HTTP server."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    if host:
        config.server.host = host
    if port:
        config.server.port = port
    if json_logs:
        config.logging.json_output = True
    root_flags = ctx.obj or {}
    if root_flags.get("verbose"):
        config.logging.verbose = True
    if root_flags.get("debug"):
        config.logging.debug = True

    configure_logging(
        verbose=config.logging.verbose,
        debug=config.logging.debug,
        json_output=config.logging.json_output,
        log_to_file=config.logging.log_to_file,
    )
    logger.info("Starting release gateway", host=config.server.host, port=config.server.port)

    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )
