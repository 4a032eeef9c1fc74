from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_ack, render_history, render_latest

logger = logging.getLogger(__name__)


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for running and talking to the sensor telemetry relay.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Relay base URL (defaults to API_BASE_URL env or http://localhost:3000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("send")
def send_command(
    ctx: typer.Context,
    distance: Optional[float] = typer.Option(None, "--distance", "-d", help="Distance in cm."),
    temperature: Optional[float] = typer.Option(
        None, "--temperature", "-t", help="Temperature in degrees."
    ),
    rfid: Optional[str] = typer.Option(None, "--rfid", "-r", help="RFID tag identifier."),
) -> None:
    """Push one reading to the relay, as the sensor device would."""
    state = _get_state(ctx)
    ack = state.client.send_reading(distance=distance, temperature=temperature, rfid=rfid)
    render_ack(ack)


@app.command("latest")
def latest_command(ctx: typer.Context) -> None:
    """Show the most recent reading and connection status."""
    state = _get_state(ctx)
    render_latest(state.client.get_latest())


@app.command("history")
def history_command(
    ctx: typer.Context,
    last: Optional[int] = typer.Option(
        None,
        "--last",
        "-n",
        min=1,
        help="Only show the most recent N readings.",
    ),
) -> None:
    """List buffered readings, oldest first."""
    state = _get_state(ctx)
    entries = state.client.get_history()
    if last is not None:
        entries = entries[-last:]
    render_history(entries)


@app.command("serve")
def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (defaults to HOST env)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", min=1, help="Port to bind (defaults to PORT env)."),
) -> None:
    """Run the relay with uvicorn."""
    import uvicorn

    from logging_config import configure_logging
    from settings import get_settings

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    configure_logging()
    logger.info("Dashboard: http://localhost:%s", bind_port)
    logger.info("Sensor endpoint: http://localhost:%s/api/sensor", bind_port)
    uvicorn.run("app.main:app", host=bind_host, port=bind_port, log_config=None)
