from __future__ import annotations

from typing import Any, Dict, Iterable

import typer

TREND_ARROWS = {"increasing": "↑", "decreasing": "↓", "stable": "→"}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_ack(payload: Dict[str, Any]) -> None:
    colour = typer.colors.GREEN if payload.get("success") else typer.colors.RED
    typer.secho(payload.get("message", ""), fg=colour)
    echo_key_values(
        [
            ("timestamp", payload.get("timestamp")),
            ("data_received", payload.get("dataReceived")),
        ]
    )


def render_snapshot(payload: Dict[str, Any]) -> None:
    echo_heading("Current Readings")
    readings = payload.get("currentReadings") or {}
    if readings:
        echo_key_values(readings.items())
    else:
        typer.echo("No readings available.")

    typer.echo()
    echo_heading("History")
    temperature = payload.get("temperature") or []
    typer.echo(f"window: {len(temperature)} points")
    if temperature:
        echo_key_values(
            [
                ("oldest", temperature[0].get("time")),
                ("newest", temperature[-1].get("time")),
            ]
        )


def render_analysis(payload: Dict[str, Any]) -> None:
    score = payload.get("habitabilityScore") or {}
    echo_heading("Habitability")
    echo_key_values(
        [
            ("status", payload.get("status")),
            ("overall", score.get("overall")),
            ("temperature", score.get("temperature")),
            ("humidity", score.get("humidity")),
            ("air_quality", score.get("airQuality")),
            ("radiation", score.get("radiation")),
        ]
    )
    typer.echo(payload.get("recommendation", ""))

    predictions = payload.get("predictions") or []
    typer.echo()
    echo_heading("Predictions")
    if predictions:
        for prediction in predictions:
            trend = prediction.get("trend")
            unit = prediction.get("unit", "")
            typer.echo(
                f"  - {prediction.get('parameter')} ({prediction.get('timeframe')}): "
                f"{prediction.get('currentValue')} {unit} -> "
                f"{prediction.get('predictedValue')} {unit} "
                f"{TREND_ARROWS.get(trend, '?')} {trend}"
            )
    else:
        typer.echo("No predictions available.")
    summary = payload.get("forecastSummary")
    if summary:
        typer.echo(summary)
