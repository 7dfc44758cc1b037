from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_health(payload: Dict[str, Any]) -> None:
    echo_heading("Exporter")
    echo_key_values(
        [
            ("status", payload.get("status")),
            ("sampler", payload.get("sampler")),
            ("devices", payload.get("devices")),
            ("cycle", payload.get("cycle")),
            ("last_cycle_at", payload.get("last_cycle_at")),
        ]
    )


def render_readings(readings: Sequence[Dict[str, Any]]) -> None:
    echo_heading("Readings")
    if not readings:
        typer.echo("No readings available.")
        return
    for reading in readings:
        typer.echo(
            f"  - {reading.get('sensorid')}: {reading.get('value')} ({reading.get('type')})"
        )


def render_devices(devices: Sequence[str], root_path: str) -> None:
    echo_heading(f"Devices under {root_path}")
    if not devices:
        typer.echo("No temperature devices found.")
        return
    for device_id in devices:
        typer.echo(f"  - {device_id}")
