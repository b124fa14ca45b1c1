from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Optional, Sequence

from sales_dashboard.models.deals import DealRecord, DealSnapshot

logger = logging.getLogger(__name__)


class SnapshotCache:
    """Pull-through cache holding the latest full deal snapshot.

    A snapshot is served while it is younger than ``ttl_seconds`` according to
    ``clock``; otherwise ``loader`` is called and its result replaces the
    snapshot wholesale. A failing loader leaves the previous state untouched
    and the error propagates to the caller.
    """

    def __init__(
        self,
        loader: Callable[[], Sequence[DealRecord]],
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        source: str = "google_sheets",
    ) -> None:
        self.loader = loader
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.source = source
        self._snapshot: Optional[DealSnapshot] = None
        self._loaded_at: float = 0.0
        self._lock = Lock()

    def get(self) -> DealSnapshot:
        with self._lock:
            if self._snapshot is not None and self._is_fresh():
                logger.debug("Serving cached deal snapshot")
                return self._snapshot
            return self._refresh()

    def refresh(self) -> DealSnapshot:
        with self._lock:
            return self._refresh()

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None
            self._loaded_at = 0.0

    def _is_fresh(self) -> bool:
        return self.clock() - self._loaded_at < self.ttl_seconds

    def _refresh(self) -> DealSnapshot:
        now = self.clock()
        deals = tuple(self.loader())
        self._snapshot = DealSnapshot(
            deals=deals,
            fetched_at=datetime.now(timezone.utc),
            source=self.source,
        )
        self._loaded_at = now
        logger.info("Loaded deal snapshot with %s deals", len(deals))
        return self._snapshot
