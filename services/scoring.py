"""Piecewise-linear habitability scoring for current sensor readings."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from models.records import CurrentReadings

logger = logging.getLogger(__name__)

OPTIMAL_SCORE = 90.0
FLOOR_SCORE = 40.0
PENALTY_SPAN = OPTIMAL_SCORE - FLOOR_SCORE
RADIATION_PLACEHOLDER_SCORE = 75


@dataclass(frozen=True)
class ScoreBand:
    """Optimal and absolute limits used to score a single metric."""

    optimal_min: float
    optimal_max: float
    abs_min: float
    abs_max: float
    inverse: bool = False

    def __post_init__(self) -> None:
        _validate_band(self.optimal_min, self.optimal_max, self.abs_min, self.abs_max)

    def score(self, value: float) -> float:
        return score(
            value,
            self.optimal_min,
            self.optimal_max,
            self.abs_min,
            self.abs_max,
            inverse=self.inverse,
        )


def _validate_band(
    optimal_min: float, optimal_max: float, abs_min: float, abs_max: float
) -> None:
    if not abs_min < optimal_min <= optimal_max < abs_max:
        raise ValueError(
            "Score band must satisfy abs_min < optimal_min <= optimal_max < abs_max, "
            f"got ({optimal_min}, {optimal_max}, {abs_min}, {abs_max})."
        )


TEMPERATURE_BAND = ScoreBand(optimal_min=15, optimal_max=25, abs_min=10, abs_max=35)
HUMIDITY_BAND = ScoreBand(optimal_min=40, optimal_max=60, abs_min=20, abs_max=80)
CO2_BAND = ScoreBand(optimal_min=400, optimal_max=1000, abs_min=300, abs_max=2000, inverse=True)


def score(
    value: float,
    optimal_min: float,
    optimal_max: float,
    abs_min: float,
    abs_max: float,
    inverse: bool = False,
) -> float:
    """Score ``value`` on a 0-100 scale against an optimal range.

    Values inside ``[optimal_min, optimal_max]`` earn a flat 90. Outside it the
    score falls linearly by 50 points across the distance to the matching
    absolute limit and never drops below 40.

    ``inverse`` is accepted for callers scoring "lower is better" metrics but
    has no effect: the three ranges above already cover every input.

    Raises:
        ValueError: if the limits leave a zero-width or inverted penalty range.
    """
    _validate_band(optimal_min, optimal_max, abs_min, abs_max)

    if optimal_min <= value <= optimal_max:
        return OPTIMAL_SCORE

    if value < optimal_min:
        span = optimal_min - abs_min
        distance = optimal_min - value
    else:
        span = abs_max - optimal_max
        distance = value - optimal_max
    return max(FLOOR_SCORE, OPTIMAL_SCORE - (distance / span) * PENALTY_SPAN)


def radiation_score() -> int:
    """Radiation is not measured yet; every snapshot gets the same placeholder."""
    return RADIATION_PLACEHOLDER_SCORE


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def overall_score(
    temperature: float, humidity: float, air_quality: float, radiation: float
) -> int:
    """Unweighted mean of the component scores, rounded half-up."""
    return round_half_up((temperature + humidity + air_quality + radiation) / 4)


def habitability_status(overall: float) -> str:
    if overall >= 80:
        return "highly habitable"
    if overall >= 60:
        return "moderately habitable"
    if overall >= 40:
        return "marginally habitable"
    return "not habitable"


def recommendation(overall: float) -> str:
    if overall >= 60:
        return (
            "This environment shows conditions suitable for human habitation. "
            "Keep monitoring the slightly elevated CO2 level."
        )
    return (
        "Additional life-support systems are required before this environment "
        "can be inhabited. Radiation and air quality are the main concerns."
    )


@dataclass
class HabitabilityScore:
    """Component scores and their rounded overall average."""

    overall: int
    temperature: float
    humidity: float
    air_quality: float
    radiation: float


class HabitabilityScorer:
    """Pure scoring component that can be unit tested in isolation."""

    def __init__(
        self,
        temperature_band: ScoreBand = TEMPERATURE_BAND,
        humidity_band: ScoreBand = HUMIDITY_BAND,
        co2_band: ScoreBand = CO2_BAND,
    ) -> None:
        self.temperature_band = temperature_band
        self.humidity_band = humidity_band
        self.co2_band = co2_band

    def evaluate(self, readings: CurrentReadings) -> HabitabilityScore:
        temperature = self.temperature_band.score(readings.temperature)
        humidity = self.humidity_band.score(readings.humidity)
        air_quality = self.co2_band.score(readings.co2)
        radiation = radiation_score()
        overall = overall_score(temperature, humidity, air_quality, radiation)
        logger.debug(
            "Scored current readings",
            extra={"overall": overall, "score": (temperature, humidity, air_quality, radiation)},
        )
        return HabitabilityScore(
            overall=overall,
            temperature=temperature,
            humidity=humidity,
            air_quality=air_quality,
            radiation=radiation,
        )
