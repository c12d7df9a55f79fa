"""Synthetic baseline data and simulated variations for the dashboard."""

from __future__ import annotations

import math
import random
from datetime import datetime, timedelta
from typing import List, Optional

from models.records import (
    CurrentReadings,
    SensorSnapshot,
    SeriesPoint,
    UVPoint,
    VOCPoint,
    VOCShare,
)
from services.prediction import round_one_decimal

VOC_DISTRIBUTION = (
    ("Methane", 35),
    ("Ethanol", 25),
    ("Acetone", 20),
    ("Formaldehyde", 15),
    ("Other", 5),
)

# Half-widths of the uniform jitter applied on each simulated tick.
TEMPERATURE_JITTER = 0.25
HUMIDITY_JITTER = 0.5
CO2_JITTER = 10.0
PRESSURE_JITTER = 0.25


def time_label(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def _hourly_labels(length: int, now: datetime) -> List[str]:
    return [time_label(now - timedelta(hours=length - index)) for index in range(length)]


def _round_int(value: float) -> float:
    return float(math.floor(value + 0.5))


def build_baseline_snapshot(length: int = 24, now: Optional[datetime] = None) -> SensorSnapshot:
    """Generate ``length`` hourly points of smooth sinusoidal readings."""
    if length < 1:
        raise ValueError("History length must be at least 1.")
    labels = _hourly_labels(length, now or datetime.now())

    temperature = [
        SeriesPoint(
            time=label,
            value=round_one_decimal(22 + math.sin(i / 3) * 5),
            average=round_one_decimal(20 + math.sin(i / 6) * 2),
        )
        for i, label in enumerate(labels)
    ]
    humidity = [
        SeriesPoint(
            time=label,
            value=round_one_decimal(60 + math.cos(i / 4) * 15),
            average=round_one_decimal(65 + math.cos(i / 8) * 5),
        )
        for i, label in enumerate(labels)
    ]
    pressure = [
        SeriesPoint(
            time=label,
            value=round_one_decimal(1013 + math.sin(i / 5) * 10),
            average=round_one_decimal(1013 + math.sin(i / 10) * 5),
        )
        for i, label in enumerate(labels)
    ]
    co2 = [
        SeriesPoint(
            time=label,
            value=_round_int(400 + math.sin(i / 2) * 100),
            average=_round_int(420 + math.sin(i / 4) * 50),
        )
        for i, label in enumerate(labels)
    ]
    uv = [
        UVPoint(
            time=label,
            uva=round_one_decimal(2 + math.sin(i / 3) * 1.5),
            uvb=round_one_decimal(1 + math.sin(i / 4) * 0.8),
        )
        for i, label in enumerate(labels)
    ]
    voc = [
        VOCPoint(
            time=label,
            voc=round_one_decimal(150 + math.sin(i / 2) * 50),
            tvoc=round_one_decimal(200 + math.cos(i / 3) * 70),
        )
        for i, label in enumerate(labels)
    ]

    current = CurrentReadings(
        temperature=temperature[-1].value,
        humidity=humidity[-1].value,
        pressure=pressure[-1].value,
        co2=co2[-1].value,
        uva=uv[-1].uva,
        uvb=uv[-1].uvb,
        voc=voc[-1].voc,
        tvoc=voc[-1].tvoc,
    )
    return SensorSnapshot(
        temperature=temperature,
        humidity=humidity,
        pressure=pressure,
        co2=co2,
        uv=uv,
        voc=voc,
        current_readings=current,
        voc_distribution=[VOCShare(name=name, value=value) for name, value in VOC_DISTRIBUTION],
    )


def simulated_variation(readings: CurrentReadings, rng: random.Random) -> dict[str, float]:
    """Return a partial update nudging the fast-moving metrics by random jitter."""
    return {
        "temperature": round_one_decimal(
            readings.temperature + rng.uniform(-TEMPERATURE_JITTER, TEMPERATURE_JITTER)
        ),
        "humidity": round_one_decimal(
            readings.humidity + rng.uniform(-HUMIDITY_JITTER, HUMIDITY_JITTER)
        ),
        "co2": _round_int(readings.co2 + rng.uniform(-CO2_JITTER, CO2_JITTER)),
        "pressure": round_one_decimal(
            readings.pressure + rng.uniform(-PRESSURE_JITTER, PRESSURE_JITTER)
        ),
    }
