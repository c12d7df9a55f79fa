"""Combines scoring and prediction into the report shown on the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List

from models.records import SensorSnapshot
from services.prediction import Prediction, TrendPredictor, forecast_summary
from services.scoring import (
    HabitabilityScore,
    HabitabilityScorer,
    habitability_status,
    recommendation,
)
from settings import PREDICTED_METRICS, get_settings


@dataclass
class AnalysisReport:
    score: HabitabilityScore
    status: str
    recommendation: str
    predictions: List[Prediction]
    forecast_summary: str


class AnalysisService:
    """Stateless: every call works only on the snapshot it is given."""

    def __init__(self, scorer: HabitabilityScorer, predictor: TrendPredictor) -> None:
        self.scorer = scorer
        self.predictor = predictor

    def analyze(self, snapshot: SensorSnapshot) -> AnalysisReport:
        score = self.scorer.evaluate(snapshot.current_readings)
        predictions = self.predictor.predict(snapshot)
        return AnalysisReport(
            score=score,
            status=habitability_status(score.overall),
            recommendation=recommendation(score.overall),
            predictions=predictions,
            forecast_summary=forecast_summary(predictions),
        )


@lru_cache
def build_default_analysis() -> AnalysisService:
    """Factory that wires the analysis engine with configured thresholds."""
    settings = get_settings()
    predictor = TrendPredictor(
        thresholds={metric: settings.threshold_for(metric) for metric in PREDICTED_METRICS},
        default_threshold=settings.trend_threshold,
    )
    return AnalysisService(scorer=HabitabilityScorer(), predictor=predictor)
