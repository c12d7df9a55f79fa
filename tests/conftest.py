from __future__ import annotations

from typing import Callable, Optional, Sequence

import pytest

from models.records import (
    CurrentReadings,
    SensorSnapshot,
    SeriesPoint,
    UVPoint,
    VOCPoint,
)

SnapshotBuilder = Callable[..., SensorSnapshot]


def _series(values: Sequence[float], average: Optional[float] = None) -> list[SeriesPoint]:
    return [
        SeriesPoint(time=f"{index:02d}:00", value=value, average=average)
        for index, value in enumerate(values)
    ]


@pytest.fixture()
def make_snapshot() -> SnapshotBuilder:
    """Build a snapshot whose current readings default to each series' last value."""

    def build(
        temperature: Sequence[float] = (22.0,) * 5,
        humidity: Sequence[float] = (50.0,) * 5,
        pressure: Sequence[float] = (1013.0,) * 5,
        co2: Sequence[float] = (700.0,) * 5,
        voc: Sequence[float] = (150.0,) * 5,
        **overrides: float,
    ) -> SensorSnapshot:
        length = len(temperature)
        readings = CurrentReadings(
            temperature=temperature[-1],
            humidity=humidity[-1],
            pressure=pressure[-1],
            co2=co2[-1],
            uva=2.0,
            uvb=1.0,
            voc=voc[-1],
            tvoc=200.0,
        )
        for name, value in overrides.items():
            setattr(readings, name, value)
        return SensorSnapshot(
            temperature=_series(temperature, average=20.0),
            humidity=_series(humidity, average=65.0),
            pressure=_series(pressure, average=1013.0),
            co2=_series(co2, average=420.0),
            uv=[UVPoint(time=f"{i:02d}:00", uva=2.0, uvb=1.0) for i in range(length)],
            voc=[
                VOCPoint(time=f"{i:02d}:00", voc=value, tvoc=200.0)
                for i, value in enumerate(voc)
            ],
            current_readings=readings,
        )

    return build
