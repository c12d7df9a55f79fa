from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_ack, render_analysis, render_snapshot

READING_NAMES = ("temperature", "humidity", "pressure", "co2", "uva", "uvb", "voc", "tvoc")


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the habitat monitor service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _parse_readings(pairs: List[str]) -> Dict[str, float]:
    readings: Dict[str, float] = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        name = name.strip().lower()
        if not sep or name not in READING_NAMES:
            raise typer.BadParameter(
                f"Expected NAME=VALUE with NAME one of {', '.join(READING_NAMES)}; got {pair!r}."
            )
        try:
            readings[name] = float(raw)
        except ValueError as exc:
            raise typer.BadParameter(f"Reading {name!r} must be numeric, got {raw!r}.") from exc
    return readings


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
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
    readings: List[str] = typer.Argument(..., help="Readings as NAME=VALUE, e.g. temperature=22.5."),
) -> None:
    """Post a partial reading update to the webhook."""
    state = _get_state(ctx)
    parsed = _parse_readings(readings)
    typer.echo(f"Sending {len(parsed)} reading(s) to {state.config.base_url} ...")
    render_ack(state.client.send_reading(parsed))


@app.command("snapshot")
def snapshot_command(ctx: typer.Context) -> None:
    """Show the latest readings held by the service."""
    state = _get_state(ctx)
    render_snapshot(state.client.get_snapshot())


@app.command("tick")
def tick_command(
    ctx: typer.Context,
    simulate: bool = typer.Option(
        False,
        "--simulate/--no-simulate",
        help="Apply random variation before appending to the history.",
    ),
    label: Optional[str] = typer.Option(None, "--label", help="Time label for the new point."),
) -> None:
    """Append the current readings to every history window."""
    state = _get_state(ctx)
    render_snapshot(state.client.advance(simulate=simulate, time_label=label))


@app.command("analysis")
def analysis_command(ctx: typer.Context) -> None:
    """Show habitability scores and trend predictions."""
    state = _get_state(ctx)
    render_analysis(state.client.get_analysis())
