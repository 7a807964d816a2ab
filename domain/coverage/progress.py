"""Coverage Bounded Context - Progress and Cancellation.

Progress is advisory: observers receive ProgressEvents at a bounded cadence
and nothing they do can change a computed result. Observer exceptions are
logged and dropped.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_EVERY = 100  # points between progress events


@dataclass(frozen=True)
class ProgressEvent:
    """Snapshot of how far a simulation has got."""

    processed: int
    total: int

    @property
    def percent(self) -> float:
        return self.processed / self.total * 100

    @property
    def message(self) -> str:
        return f"Calculating coverage: {round(self.percent)}%"


ProgressCallback = Callable[[ProgressEvent], None]


class ProgressReporter:
    """Forwards monotonically increasing progress to an optional observer.

    Sequential scans call tick() per point and get an event on every
    ``every``-th point. Chunked scans call advance() per finished chunk and
    get an event whenever at least ``every`` points completed since the last
    one; spacing between those events is uneven.
    """

    def __init__(
        self,
        total: int,
        callback: ProgressCallback | None = None,
        every: int = DEFAULT_PROGRESS_EVERY,
    ) -> None:
        if every <= 0:
            raise ValueError(f"every must be positive, got {every}")
        self.total = total
        self.callback = callback
        self.every = every
        self.processed = 0
        self._last_reported = 0

    def tick(self) -> None:
        self.processed += 1
        if self.callback is not None and self.processed % self.every == 0:
            self._emit()

    def advance(self, count: int) -> None:
        self.processed += count
        if (
            self.callback is not None
            and self.processed - self._last_reported >= self.every
        ):
            self._emit()

    def _emit(self) -> None:
        self._last_reported = self.processed
        event = ProgressEvent(processed=self.processed, total=self.total)
        try:
            self.callback(event)  # type: ignore[misc]
        except Exception:
            logger.exception("Progress observer failed at %.1f%%", event.percent)


class CancellationToken:
    """Thread-safe cancellation flag checked by the engine between chunks."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
