from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional


_HISTORY_LENGTH_ENV = "HISTORY_LENGTH"
_SIMULATION_INTERVAL_ENV = "SIMULATION_INTERVAL_SECONDS"
_SIMULATION_SEED_ENV = "SIMULATION_SEED"
_TREND_THRESHOLD_ENV = "TREND_THRESHOLD"
_TREND_THRESHOLD_PREFIX = "TREND_THRESHOLD_"
_LOG_LEVEL_ENV = "LOG_LEVEL"

PREDICTED_METRICS = ("temperature", "humidity", "co2", "voc")


@dataclass(frozen=True)
class Settings:
    history_length: int
    simulation_interval: float
    simulation_seed: Optional[int]
    trend_threshold: float
    log_level: str
    trend_thresholds: Dict[str, float] = field(default_factory=dict)

    def threshold_for(self, metric: str) -> float:
        return self.trend_thresholds.get(metric, self.trend_threshold)


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


def _read_non_negative_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _read_metric_thresholds(default: float) -> Dict[str, float]:
    thresholds: Dict[str, float] = {}
    for metric in PREDICTED_METRICS:
        name = f"{_TREND_THRESHOLD_PREFIX}{metric.upper()}"
        if os.getenv(name) is None:
            continue
        thresholds[metric] = _read_non_negative_float(name, default)
    return thresholds


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    threshold = _read_non_negative_float(_TREND_THRESHOLD_ENV, 0.5)
    return Settings(
        history_length=_read_positive_int(_HISTORY_LENGTH_ENV, 24),
        simulation_interval=_read_non_negative_float(_SIMULATION_INTERVAL_ENV, 0.0),
        simulation_seed=_read_optional_int(_SIMULATION_SEED_ENV),
        trend_threshold=threshold,
        log_level=_read_log_level("INFO"),
        trend_thresholds=_read_metric_thresholds(threshold),
    )
