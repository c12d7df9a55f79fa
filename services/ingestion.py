"""Pure snapshot transitions: merging partial readings and sliding the history window."""

from __future__ import annotations

import copy
import logging
import math
from typing import Any, Dict, List, Mapping, Tuple, TypeVar

from models.records import (
    CurrentReadings,
    SensorSnapshot,
    SeriesPoint,
    UVPoint,
    VOCPoint,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def partition_update(incoming: Any) -> Tuple[Dict[str, float], List[str]]:
    """Split a partial update into mergeable readings and ignored keys.

    Only known reading names with finite numeric values are accepted; booleans
    are rejected even though they are ``int`` subclasses.
    """
    if not isinstance(incoming, Mapping):
        return {}, []

    known = set(CurrentReadings.field_names())
    accepted: Dict[str, float] = {}
    ignored: List[str] = []
    for key, value in incoming.items():
        if key not in known or isinstance(value, bool) or not isinstance(value, (int, float)):
            ignored.append(str(key))
            continue
        try:
            number = float(value)
        except OverflowError:
            ignored.append(str(key))
            continue
        if not math.isfinite(number):
            ignored.append(str(key))
            continue
        accepted[key] = number
    return accepted, ignored


def merge_reading(current: SensorSnapshot, incoming: Any) -> SensorSnapshot:
    """Return a copy of ``current`` with the named current readings replaced.

    History is left untouched. Malformed input yields an unchanged copy.
    """
    accepted, ignored = partition_update(incoming)
    merged = copy.deepcopy(current)
    if ignored:
        logger.debug("Ignoring unmergeable reading fields", extra={"ignored": ignored})
    for name, value in accepted.items():
        setattr(merged.current_readings, name, value)
    return merged


def _slide(series: List[_T], point: _T) -> List[_T]:
    if not series:
        return []
    return [*series[1:], point]


def _series_point(series: List[SeriesPoint], label: str, value: float) -> SeriesPoint:
    average = series[-1].average if series else None
    return SeriesPoint(time=label, value=value, average=average)


def advance_window(current: SensorSnapshot, label: str) -> SensorSnapshot:
    """Drop the oldest point of every series and append the current readings.

    The running-average companion carries forward from the previous newest
    point, and every series keeps its length.
    """
    advanced = copy.deepcopy(current)
    readings = advanced.current_readings
    for metric in ("temperature", "humidity", "pressure", "co2"):
        series: List[SeriesPoint] = getattr(advanced, metric)
        point = _series_point(series, label, getattr(readings, metric))
        setattr(advanced, metric, _slide(series, point))
    advanced.uv = _slide(advanced.uv, UVPoint(time=label, uva=readings.uva, uvb=readings.uvb))
    advanced.voc = _slide(
        advanced.voc, VOCPoint(time=label, voc=readings.voc, tvoc=readings.tvoc)
    )
    return advanced
