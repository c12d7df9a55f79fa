"""Pydantic schemas for the HTTP API layer.

Wire payloads use camelCase keys so the dashboard and existing webhook
senders keep their field names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.records import SensorSnapshot
from services.analysis import AnalysisReport
from services.prediction import Prediction, Trend
from services.scoring import HabitabilityScore


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SeriesPointModel(WireModel):
    time: str
    value: float
    average: Optional[float] = None


class UVPointModel(WireModel):
    time: str
    uva: float
    uvb: float


class VOCPointModel(WireModel):
    time: str
    voc: float
    tvoc: float


class VOCShareModel(WireModel):
    name: str
    value: int


class CurrentReadingsModel(WireModel):
    temperature: float = Field(..., description="Degrees Celsius.")
    humidity: float = Field(..., description="Relative humidity in percent.")
    pressure: float = Field(..., description="Hectopascal.")
    co2: float = Field(..., description="Parts per million.")
    uva: float
    uvb: float
    voc: float = Field(..., description="Parts per billion.")
    tvoc: float = Field(..., description="Parts per billion.")


class SnapshotResponse(WireModel):
    """Latest readings together with every history window."""

    temperature: List[SeriesPointModel]
    humidity: List[SeriesPointModel]
    pressure: List[SeriesPointModel]
    co2: List[SeriesPointModel]
    uv: List[UVPointModel]
    voc: List[VOCPointModel]
    voc_distribution: List[VOCShareModel] = Field(default_factory=list)
    current_readings: CurrentReadingsModel

    @classmethod
    def from_snapshot(cls, snapshot: SensorSnapshot) -> "SnapshotResponse":
        def series(points) -> List[SeriesPointModel]:
            return [
                SeriesPointModel(time=p.time, value=p.value, average=p.average) for p in points
            ]

        return cls(
            temperature=series(snapshot.temperature),
            humidity=series(snapshot.humidity),
            pressure=series(snapshot.pressure),
            co2=series(snapshot.co2),
            uv=[UVPointModel(time=p.time, uva=p.uva, uvb=p.uvb) for p in snapshot.uv],
            voc=[VOCPointModel(time=p.time, voc=p.voc, tvoc=p.tvoc) for p in snapshot.voc],
            voc_distribution=[
                VOCShareModel(name=share.name, value=share.value)
                for share in snapshot.voc_distribution
            ],
            current_readings=CurrentReadingsModel(**snapshot.current_readings.as_dict()),
        )


class WebhookAck(WireModel):
    """Acknowledgement returned to webhook senders."""

    success: bool
    message: str
    timestamp: Optional[datetime] = None
    data_received: Optional[Dict[str, Any]] = None


class TickRequest(WireModel):
    simulate: bool = Field(
        default=False, description="Apply random variation before advancing the window."
    )
    time_label: Optional[str] = Field(
        default=None, description="Label for the new history point; defaults to HH:MM now."
    )


class HabitabilityScoreModel(WireModel):
    overall: int = Field(..., ge=0, le=100)
    temperature: float = Field(..., ge=0, le=100)
    humidity: float = Field(..., ge=0, le=100)
    air_quality: float = Field(..., ge=0, le=100)
    radiation: float = Field(..., ge=0, le=100)

    @classmethod
    def from_score(cls, score: HabitabilityScore) -> "HabitabilityScoreModel":
        return cls(
            overall=score.overall,
            temperature=score.temperature,
            humidity=score.humidity,
            air_quality=score.air_quality,
            radiation=score.radiation,
        )


class PredictionModel(WireModel):
    parameter: str
    current_value: float
    predicted_value: float
    trend: Trend
    unit: str
    timeframe: str

    @classmethod
    def from_prediction(cls, prediction: Prediction) -> "PredictionModel":
        return cls(
            parameter=prediction.parameter,
            current_value=prediction.current_value,
            predicted_value=prediction.predicted_value,
            trend=prediction.trend,
            unit=prediction.unit,
            timeframe=prediction.timeframe,
        )


class AnalysisResponse(WireModel):
    """Habitability score and trend predictions for the latest snapshot."""

    habitability_score: HabitabilityScoreModel
    status: str
    recommendation: str
    predictions: List[PredictionModel] = Field(default_factory=list)
    forecast_summary: str
    generated_at: datetime

    @classmethod
    def from_report(cls, report: AnalysisReport, generated_at: datetime) -> "AnalysisResponse":
        return cls(
            habitability_score=HabitabilityScoreModel.from_score(report.score),
            status=report.status,
            recommendation=report.recommendation,
            predictions=[PredictionModel.from_prediction(p) for p in report.predictions],
            forecast_summary=report.forecast_summary,
            generated_at=generated_at,
        )
