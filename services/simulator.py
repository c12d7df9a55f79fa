"""Background loop that keeps the dashboard moving when no sensor posts arrive."""

from __future__ import annotations

import logging
import random
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Event, Lock
from typing import Optional

from datastore.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


class SimulationService:
    """Applies a simulated tick to the store every ``interval`` seconds."""

    def __init__(
        self,
        store: SnapshotStore,
        interval: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("Simulation interval must be positive.")
        self.store = store
        self.interval = interval
        self.rng = rng or random.Random()
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="simulator")
        self._stop = Event()
        self._future: Optional[Future[None]] = None
        self._state_lock = Lock()

    @property
    def running(self) -> bool:
        with self._state_lock:
            return self._future is not None and not self._future.done()

    def start(self) -> None:
        with self._state_lock:
            if self._future is not None and not self._future.done():
                return
            self._stop.clear()
            self._future = self.executor.submit(self._run)
        logger.info("Started reading simulator", extra={"interval": self.interval})

    def shutdown(self) -> None:
        """Stop the loop and release the worker thread."""
        self._stop.set()
        self.executor.shutdown(wait=False, cancel_futures=True)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.store.simulate_tick(self.rng)
            except RuntimeError as exc:
                logger.warning("Skipping simulated tick", extra={"reason": str(exc)})
            except Exception:
                logger.exception("Simulated tick failed")
