from __future__ import annotations

import copy
import logging
import random
from datetime import datetime
from functools import lru_cache
from threading import Lock
from typing import Any, Callable, Dict, List, Optional

from models.records import SensorSnapshot
from services.generator import build_baseline_snapshot, simulated_variation, time_label
from services.ingestion import advance_window, merge_reading, partition_update
from settings import get_settings

logger = logging.getLogger(__name__)

SnapshotFactory = Callable[[int], SensorSnapshot]


class SnapshotStore:
    """Process-wide holder of the latest sensor snapshot.

    The store must be initialised before use, either explicitly with
    :meth:`initialize` or by constructing it with ``initial``. Every
    read-modify-write runs under one lock and callers only ever see copies.
    """

    def __init__(
        self,
        history_length: int = 24,
        factory: SnapshotFactory = build_baseline_snapshot,
        initial: Optional[SensorSnapshot] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.history_length = history_length
        self._factory = factory
        self._clock = clock
        self._lock = Lock()
        self._snapshot: Optional[SensorSnapshot] = copy.deepcopy(initial)

    @property
    def initialized(self) -> bool:
        with self._lock:
            return self._snapshot is not None

    def initialize(self, reset: bool = False) -> None:
        """Seed the store from the baseline generator unless it already holds data."""
        with self._lock:
            if self._snapshot is not None and not reset:
                return
            self._snapshot = self._factory(self.history_length)
        logger.info("Seeded sensor snapshot", extra={"window": self.history_length})

    def get_snapshot(self) -> SensorSnapshot:
        with self._lock:
            return copy.deepcopy(self._require())

    def submit_reading(self, incoming: Any) -> Dict[str, float]:
        """Merge a partial update into the current readings.

        Returns the readings that were applied; unknown or non-numeric fields
        are skipped.
        """
        accepted, ignored = partition_update(incoming)
        with self._lock:
            self._snapshot = merge_reading(self._require(), accepted)
        logger.info(
            "Merged sensor reading",
            extra={"fields": sorted(accepted), "ignored": ignored or None},
        )
        return accepted

    def advance(self, label: Optional[str] = None) -> SensorSnapshot:
        """Append the current readings to every history window."""
        label = label or time_label(self._clock())
        with self._lock:
            self._snapshot = advance_window(self._require(), label)
            return copy.deepcopy(self._snapshot)

    def simulate_tick(self, rng: random.Random, label: Optional[str] = None) -> SensorSnapshot:
        """Jitter the fast-moving readings and advance the window in one step."""
        label = label or time_label(self._clock())
        with self._lock:
            current = self._require()
            variation = simulated_variation(current.current_readings, rng)
            merged = merge_reading(current, variation)
            self._snapshot = advance_window(merged, label)
            snapshot = copy.deepcopy(self._snapshot)
        logger.debug(
            "Applied simulated tick",
            extra={"fields": sorted(variation), "time_label": label},
        )
        return snapshot

    def history_lengths(self) -> List[int]:
        with self._lock:
            snapshot = self._require()
            return [
                len(snapshot.temperature),
                len(snapshot.humidity),
                len(snapshot.pressure),
                len(snapshot.co2),
                len(snapshot.uv),
                len(snapshot.voc),
            ]

    def _require(self) -> SensorSnapshot:
        if self._snapshot is None:
            raise RuntimeError("Snapshot store has not been initialized.")
        return self._snapshot


@lru_cache
def build_default_store(history_length: Optional[int] = None) -> SnapshotStore:
    settings = get_settings()
    length = settings.history_length if history_length is None else history_length
    store = SnapshotStore(history_length=length)
    store.initialize()
    return store
