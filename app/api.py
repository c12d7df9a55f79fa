"""HTTP route definitions for the service."""

from __future__ import annotations

import json
import logging
import random
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.schemas import AnalysisResponse, SnapshotResponse, TickRequest, WebhookAck
from datastore.snapshot_store import SnapshotStore, build_default_store
from services.analysis import AnalysisService, build_default_analysis

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store() -> SnapshotStore:
    return build_default_store()


def get_analysis() -> AnalysisService:
    return build_default_analysis()


def _rejected(message: str) -> JSONResponse:
    ack = WebhookAck(success=False, message=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ack.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@router.post(
    "/api/webhook",
    response_model=WebhookAck,
    response_model_exclude_none=True,
    summary="Receive a partial sensor reading update.",
)
async def receive_reading(
    request: Request,
    store: SnapshotStore = Depends(get_store),
):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Rejected webhook payload", extra={"reason": str(exc)})
        return _rejected("Failed to process data")

    if not isinstance(payload, dict):
        logger.warning(
            "Rejected webhook payload",
            extra={"reason": "body is not a JSON object", "invalid_value": type(payload).__name__},
        )
        return _rejected("Failed to process data")

    store.submit_reading(payload)
    return WebhookAck(
        success=True,
        message="Data received successfully",
        timestamp=datetime.now(timezone.utc),
        data_received=payload,
    )


@router.get(
    "/api/webhook",
    response_model=SnapshotResponse,
    summary="Fetch the latest snapshot of readings and history.",
)
async def latest_snapshot(store: SnapshotStore = Depends(get_store)) -> SnapshotResponse:
    return SnapshotResponse.from_snapshot(store.get_snapshot())


@router.post(
    "/api/webhook/tick",
    response_model=SnapshotResponse,
    summary="Append the current readings to the history windows.",
)
async def advance_history(
    tick: Optional[TickRequest] = None,
    store: SnapshotStore = Depends(get_store),
) -> SnapshotResponse:
    tick = tick or TickRequest()
    if tick.simulate:
        snapshot = store.simulate_tick(random.Random(), label=tick.time_label)
    else:
        snapshot = store.advance(label=tick.time_label)
    return SnapshotResponse.from_snapshot(snapshot)


@router.get(
    "/api/analysis",
    response_model=AnalysisResponse,
    summary="Score habitability and predict trends for the latest snapshot.",
)
async def analyze_latest(
    store: SnapshotStore = Depends(get_store),
    analysis: AnalysisService = Depends(get_analysis),
) -> AnalysisResponse:
    report = analysis.analyze(store.get_snapshot())
    return AnalysisResponse.from_report(report, generated_at=datetime.now(timezone.utc))


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /ui for the dashboard and /health for service status."}
