"""In-memory adapters for TowerRepository, SimulationRepository and
ProgressSubscriber.

Towers are returned in insertion order, which is the order the engine uses
for best-server tie-breaking. Records are immutable, so storing them by
reference is safe.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Iterable, Sequence

from domain.coverage.repositories import SimulationProgress, SimulationRecord
from domain.coverage.value_objects import Tower, TowerStatus

logger = logging.getLogger(__name__)


class InMemoryTowerRepository:
    """TowerRepository backed by an insertion-ordered dict keyed by Tower.id."""

    def __init__(self, towers: Iterable[Tower] = ()) -> None:
        self._towers: dict[str, Tower] = {}
        for tower in towers:
            self.add(tower)

    def add(self, tower: Tower) -> None:
        if tower.id in self._towers:
            raise ValueError(f"Duplicate tower id: {tower.id}")
        self._towers[tower.id] = tower

    def list_towers(
        self,
        ids: Sequence[str] | None = None,
        status: TowerStatus | None = None,
    ) -> list[Tower]:
        wanted = set(ids) if ids is not None else None
        towers = [
            t
            for t in self._towers.values()
            if (wanted is None or t.id in wanted)
            and (status is None or t.status == status)
        ]
        if wanted is not None and len(towers) < len(wanted):
            logger.debug(
                "%d of %d requested towers not found",
                len(wanted) - len(towers),
                len(wanted),
            )
        return towers


class InMemorySimulationRepository:
    """SimulationRepository keeping records in a dict; assigns uuid4 hex ids."""

    def __init__(self) -> None:
        self._records: dict[str, SimulationRecord] = {}
        self._lock = threading.Lock()

    def save(self, record: SimulationRecord) -> SimulationRecord:
        if record.id is None:
            record = record.model_copy(update={"id": uuid.uuid4().hex})
        with self._lock:
            self._records[record.id] = record  # type: ignore[index]
        return record

    def get(self, simulation_id: str) -> SimulationRecord | None:
        with self._lock:
            return self._records.get(simulation_id)

    def __len__(self) -> int:
        return len(self._records)


class RecordingProgressSubscriber:
    """ProgressSubscriber that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[SimulationProgress] = []
        self._lock = threading.Lock()

    def publish(self, event: SimulationProgress) -> None:
        with self._lock:
            self.events.append(event)

    @property
    def progress_values(self) -> list[float]:
        return [e.progress for e in self.events]
