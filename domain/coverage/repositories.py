"""Domain Port(s) for Coverage I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from domain.coverage.value_objects import (
    CoveragePoint,
    CoverageStatistics,
    SimulationParameters,
    Tower,
    TowerStatus,
)
from domain.geodesy.value_objects import GeoArea


class SimulationRecord(BaseModel):
    """Persisted simulation: inputs plus the engine's output, verbatim."""

    id: str | None = None
    name: str
    description: str = ""
    area: GeoArea
    parameters: SimulationParameters
    tower_ids: tuple[str, ...] = Field(alias="towers")
    grid_resolution: int = Field(alias="gridResolution")
    coverage_data: tuple[CoveragePoint, ...] = Field(alias="coverageData")
    statistics: CoverageStatistics
    created_by: str = Field(default="system", alias="createdBy")
    is_public: bool = Field(default=True, alias="isPublic")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="createdAt"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SimulationProgress(BaseModel):
    """Progress notification for subscribers of a running simulation."""

    simulation_id: str = Field(alias="simulationId")
    progress: float = Field(ge=0, le=100)
    message: str
    error: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TowerRepository(Protocol):
    """Port supplying towers to simulations, in a stable order."""

    def list_towers(
        self,
        ids: Sequence[str] | None = None,
        status: TowerStatus | None = None,
    ) -> list[Tower]:
        """Return towers, optionally restricted to ids and/or status."""
        ...


class SimulationRepository(Protocol):
    """Port persisting simulation records."""

    def save(self, record: SimulationRecord) -> SimulationRecord:
        """Store record (assigning an id if it has none) and return it."""
        ...

    def get(self, simulation_id: str) -> SimulationRecord | None:
        """Return the stored record or None."""
        ...


class ProgressSubscriber(Protocol):
    """Port for fire-and-forget progress notifications."""

    def publish(self, event: SimulationProgress) -> None: ...
