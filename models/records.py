"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional


@dataclass(slots=True)
class SeriesPoint:
    """A single charted reading with its optional running average."""

    time: str
    value: float
    average: Optional[float] = None


@dataclass(slots=True)
class UVPoint:
    time: str
    uva: float
    uvb: float


@dataclass(slots=True)
class VOCPoint:
    time: str
    voc: float
    tvoc: float


@dataclass(slots=True)
class VOCShare:
    name: str
    value: int


@dataclass(slots=True)
class CurrentReadings:
    """Latest scalar value for every tracked metric."""

    temperature: float
    humidity: float
    pressure: float
    co2: float
    uva: float
    uvb: float
    voc: float
    tvoc: float

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(item.name for item in fields(cls))

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass
class SensorSnapshot:
    """Current readings plus the fixed-length history window of each metric.

    Every history list is oldest-first and all of them share the same length.
    """

    temperature: List[SeriesPoint]
    humidity: List[SeriesPoint]
    pressure: List[SeriesPoint]
    co2: List[SeriesPoint]
    uv: List[UVPoint]
    voc: List[VOCPoint]
    current_readings: CurrentReadings
    voc_distribution: List[VOCShare] = field(default_factory=list)

    def series_values(self, metric: str) -> List[float]:
        """Return the plain value history for ``metric``, oldest first."""
        if metric in {"temperature", "humidity", "pressure", "co2"}:
            return [point.value for point in getattr(self, metric)]
        if metric in {"uva", "uvb"}:
            return [getattr(point, metric) for point in self.uv]
        if metric in {"voc", "tvoc"}:
            return [getattr(point, metric) for point in self.voc]
        raise KeyError(f"Unknown metric {metric!r}.")
