"""Short-window linear trend extrapolation for metric histories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence

from models.records import SensorSnapshot

logger = logging.getLogger(__name__)

TREND_WINDOW = 5
STEPS_AHEAD = 2
DEFAULT_TREND_THRESHOLD = 0.5


class Trend(str, Enum):
    increasing = "increasing"
    decreasing = "decreasing"
    stable = "stable"


def _average_change(series: Sequence[float], window: int = TREND_WINDOW) -> Optional[float]:
    """Mean step between consecutive values in the last ``window`` points."""
    recent = list(series)[-window:]
    if len(recent) < 2:
        return None
    steps = [current - previous for previous, current in zip(recent, recent[1:])]
    return sum(steps) / len(steps)


def round_one_decimal(value: float) -> float:
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def predict_next(series: Sequence[float]) -> float:
    """Extrapolate two steps past the last value using the recent mean slope.

    An empty series predicts 0 and a single point predicts itself.
    """
    if not series:
        return 0.0
    average_change = _average_change(series)
    if average_change is None:
        return float(series[-1])
    return round_one_decimal(series[-1] + average_change * STEPS_AHEAD)


def classify_trend(
    series: Sequence[float], threshold: float = DEFAULT_TREND_THRESHOLD
) -> Trend:
    """Classify the recent slope; steps smaller than ``threshold`` are stable."""
    average_change = _average_change(series)
    if average_change is None or abs(average_change) < threshold:
        return Trend.stable
    return Trend.increasing if average_change > 0 else Trend.decreasing


@dataclass(frozen=True)
class MetricForecast:
    """How a metric is labelled and read when building predictions."""

    metric: str
    parameter: str
    unit: str
    timeframe: str
    current: Callable[[SensorSnapshot], float]


DEFAULT_FORECASTS = (
    MetricForecast(
        metric="temperature",
        parameter="Temperature",
        unit="°C",
        timeframe="tomorrow",
        current=lambda snapshot: snapshot.current_readings.temperature,
    ),
    MetricForecast(
        metric="humidity",
        parameter="Humidity",
        unit="%",
        timeframe="tomorrow",
        current=lambda snapshot: snapshot.current_readings.humidity,
    ),
    MetricForecast(
        metric="co2",
        parameter="CO₂",
        unit="ppm",
        timeframe="next 24 hours",
        current=lambda snapshot: snapshot.current_readings.co2,
    ),
    MetricForecast(
        metric="voc",
        parameter="VOC",
        unit="ppb",
        timeframe="next 24 hours",
        current=lambda snapshot: snapshot.current_readings.voc,
    ),
)


@dataclass
class Prediction:
    parameter: str
    current_value: float
    predicted_value: float
    trend: Trend
    unit: str
    timeframe: str
    metric: str = ""


class TrendPredictor:
    """Builds one prediction per configured metric from a snapshot's history."""

    def __init__(
        self,
        thresholds: Optional[Mapping[str, float]] = None,
        default_threshold: float = DEFAULT_TREND_THRESHOLD,
        forecasts: Sequence[MetricForecast] = DEFAULT_FORECASTS,
    ) -> None:
        self.thresholds = dict(thresholds or {})
        self.default_threshold = default_threshold
        self.forecasts = tuple(forecasts)

    def threshold_for(self, metric: str) -> float:
        return self.thresholds.get(metric, self.default_threshold)

    def predict(self, snapshot: SensorSnapshot) -> List[Prediction]:
        predictions: List[Prediction] = []
        for forecast in self.forecasts:
            history = snapshot.series_values(forecast.metric)
            trend = classify_trend(history, self.threshold_for(forecast.metric))
            predictions.append(
                Prediction(
                    parameter=forecast.parameter,
                    current_value=forecast.current(snapshot),
                    predicted_value=predict_next(history),
                    trend=trend,
                    unit=forecast.unit,
                    timeframe=forecast.timeframe,
                    metric=forecast.metric,
                )
            )
            logger.debug(
                "Predicted metric trend",
                extra={"metric": forecast.metric, "trend": trend.value},
            )
        return predictions


def forecast_summary(predictions: Sequence[Prediction]) -> str:
    """Headline for the prediction panel, warning on the first hazard found."""
    if any(
        p.metric == "temperature" and p.trend is Trend.increasing and p.predicted_value > 30
        for p in predictions
    ):
        return (
            "Based on current trends, conditions are expected to deteriorate "
            "as the temperature keeps rising."
        )
    if any(
        p.metric == "co2" and p.trend is Trend.increasing and p.predicted_value > 1500
        for p in predictions
    ):
        return "Conditions are expected to deteriorate as the CO₂ level keeps rising."
    return "Environmental parameters are expected to stay within tolerable limits over the next 24 hours."
