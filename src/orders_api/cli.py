"""Command-line entry point for the orders service."""

import asyncio
from typing import Any

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from orders_api import __version__
from orders_api.config import Settings
from orders_api.core.errors import ShutdownError, StartupError
from orders_api.core.logging import configure_logging
from orders_api.service import run


console = Console()
logger = structlog.get_logger()

app = typer.Typer(
    name="orders-api",
    help="Serve orders from Redis over HTTP, with tracing.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """Orders API - traced read endpoint for orders."""
    if version:
        console.print(f"[bold cyan]orders-api[/bold cyan] version {__version__}")
        raise typer.Exit()


@app.command(name="serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Listen address."),
    port: int | None = typer.Option(None, "--port", "-p", help="Listen port."),
    redis_url: str | None = typer.Option(None, "--redis-url", help="Redis URL."),
    otlp_endpoint: str | None = typer.Option(
        None, "--otlp-endpoint", help="OTLP gRPC collector address."
    ),
) -> None:
    """Start the HTTP service and block until SIGINT/SIGTERM."""
    overrides: dict[str, Any] = {
        key: value
        for key, value in {
            "host": host,
            "port": port,
            "redis_url": redis_url,
            "otlp_endpoint": otlp_endpoint,
        }.items()
        if value is not None
    }
    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        console.print(
            f"[bold red]Invalid configuration:[/bold red] {escape(str(exc))}"
        )
        raise typer.Exit(code=1) from exc
    configure_logging(settings)

    try:
        asyncio.run(run(settings))
    except StartupError as exc:
        logger.critical("startup_failed", error=str(exc))
        console.print(f"[bold red]Startup failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    except ShutdownError as exc:
        logger.error("shutdown_failed", errors=[str(e) for e in exc.errors])
        raise typer.Exit(code=1) from exc


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
