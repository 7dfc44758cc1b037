from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

import typer
import uvicorn

from cli.client import ExporterClient
from cli.config import CLIConfig, load_config
from cli.render import render_devices, render_health, render_readings
from logging_config import configure_logging
from services.discovery import DiscoveryError, DiscoveryStrategy, discover
from settings import get_settings, normalize_path, parse_listen_address
from storage.onewire import OneWireFilesystem

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    config: CLIConfig


app = typer.Typer(
    help="Run and query the OneWire temperature exporter.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Exporter base URL for query commands (defaults to ONEWIRE_EXPORTER_URL env or http://localhost:8105).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds for query commands.",
    ),
) -> None:
    """Entry point for the CLI."""
    ctx.obj = CLIState(config=load_config(base_url=base_url, timeout=timeout))


@app.command("serve")
def serve_command(
    listen_address: Optional[str] = typer.Option(
        None,
        "--web.listen-address",
        help="Address and port to expose metrics.",
    ),
    metrics_path: Optional[str] = typer.Option(
        None,
        "--web.telemetry-path",
        help="Path under which to expose metrics.",
    ),
    json_path: Optional[str] = typer.Option(
        None,
        "--web.json-path",
        help="Path under which to expose json metrics.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    """Start sampling sensors and serve the HTTP endpoints."""
    settings = get_settings()
    try:
        settings = replace(
            settings,
            listen_address=listen_address or settings.listen_address,
            metrics_path=normalize_path(metrics_path) if metrics_path else settings.metrics_path,
            json_path=normalize_path(json_path) if json_path else settings.json_path,
            log_level=log_level.upper() if log_level else settings.log_level,
        )
        host, port = parse_listen_address(settings.listen_address)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    configure_logging(settings.log_level, settings.log_format, force=True)

    # Imported lazily so query commands do not build the default application.
    from app.main import create_app

    application = create_app(settings)
    logger.info("Exporter listening", extra={"listen_address": settings.listen_address})
    uvicorn.run(application, host=host, port=port, log_config=None)


@app.command("devices")
def devices_command() -> None:
    """Run sensor discovery once and list the temperature devices found."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    filesystem = OneWireFilesystem()
    try:
        devices = discover(filesystem, strategy=DiscoveryStrategy(settings.discovery_strategy))
    except DiscoveryError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    render_devices(devices, str(filesystem.root_path))


@app.command("readings")
def readings_command(
    ctx: typer.Context,
    health: bool = typer.Option(
        False,
        "--health/--no-health",
        help="Also show sampler status.",
    ),
) -> None:
    """Fetch the latest readings from a running exporter."""
    state = _get_state(ctx)
    client = ExporterClient(state.config)
    try:
        if health:
            render_health(client.get_health())
            typer.echo()
        render_readings(client.get_readings())
    finally:
        client.close()
