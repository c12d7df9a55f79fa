from __future__ import annotations
import random
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api import router
from app.web import router as web_router
from datastore.snapshot_store import build_default_store
from logging_config import configure_logging
from services.analysis import build_default_analysis
from services.simulator import SimulationService
from settings import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    store = build_default_store()
    simulator: Optional[SimulationService] = None
    if settings.simulation_interval > 0:
        simulator = SimulationService(
            store=store,
            interval=settings.simulation_interval,
            rng=random.Random(settings.simulation_seed),
        )
        simulator.start()
    app.state.simulator = simulator
    try:
        yield
    finally:
        if simulator is not None:
            simulator.shutdown()
        build_default_store.cache_clear()
        build_default_analysis.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Habitat Monitor",
        description="Environmental sensor dashboard with habitability scoring and trend prediction.",
        version="0.1.0",
        lifespan=lifespan,
    )
    static_dir = Path(__file__).resolve().parent.parent / "static"
    app.mount("/static", StaticFiles(directory=static_dir), name="static")
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
