from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_ack(payload: Dict[str, Any]) -> None:
    color = typer.colors.GREEN if payload.get("success") else typer.colors.RED
    typer.secho(
        f"{payload.get('message', 'No message')} (timestamp={payload.get('timestamp')})",
        fg=color,
    )


def render_latest(payload: Dict[str, Any]) -> None:
    echo_heading("Latest Reading")
    echo_key_values(
        [
            ("status", payload.get("status")),
            ("last_update", payload.get("lastUpdate") or "never"),
            ("distance", payload.get("distance")),
            ("temperature", payload.get("temperature")),
            ("rfid", payload.get("rfid")),
        ]
    )


def render_history(entries: List[Dict[str, Any]]) -> None:
    echo_heading(f"History ({len(entries)} readings)")
    if not entries:
        typer.echo("No readings recorded.")
        return
    for entry in entries:
        typer.echo(
            f"  - [{entry.get('lastUpdate')}] distance={entry.get('distance')} "
            f"temperature={entry.get('temperature')} rfid={entry.get('rfid')}"
        )
