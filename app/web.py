from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from datastore.snapshot_store import SnapshotStore, build_default_store
from services.analysis import AnalysisService, build_default_analysis

REFRESH_SECONDS = 5

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

TREND_ARROWS = {"increasing": "↑", "decreasing": "↓", "stable": "→"}


def get_store() -> SnapshotStore:
    return build_default_store()


def get_analysis() -> AnalysisService:
    return build_default_analysis()


def _status_tone(overall: int) -> str:
    if overall >= 60:
        return "success"
    if overall >= 40:
        return "warning"
    return "destructive"


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    store: SnapshotStore = Depends(get_store),
    analysis: AnalysisService = Depends(get_analysis),
) -> HTMLResponse:
    snapshot = store.get_snapshot()
    report = analysis.analyze(snapshot)
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "snapshot": snapshot,
            "readings": snapshot.current_readings.as_dict(),
            "report": report,
            "tone": _status_tone(report.score.overall),
            "arrows": TREND_ARROWS,
            "refresh_seconds": REFRESH_SECONDS,
        },
    )
