"""Simulation orchestration: towers in, coverage record out.

SimulationService wires the coverage engine to the domain ports:
1) Resolve the ordered tower list through TowerRepository
2) Publish a start event (10%)
3) Run generate_coverage_data, mapping engine progress into 10-90%
4) Persist the SimulationRecord through SimulationRepository
5) Publish a completion event (100%), or a failure event (0%) and re-raise

Progress publishing is fire-and-forget: a failing subscriber is logged and
never affects the simulation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import contextmanager

from pydantic import BaseModel, ConfigDict, Field

from domain.coverage.engine import evaluate_point, generate_coverage_data
from domain.coverage.errors import CoverageError
from domain.coverage.progress import (
    CancellationToken,
    ProgressCallback,
    ProgressEvent,
)
from domain.coverage.repositories import (
    ProgressSubscriber,
    SimulationProgress,
    SimulationRecord,
    SimulationRepository,
    TowerRepository,
)
from domain.coverage.value_objects import (
    CoveragePoint,
    CoverageResult,
    SimulationParameters,
    Tower,
    TowerInventory,
    TowerStatus,
)
from domain.geodesy.value_objects import GeoArea, GeoPoint
from src.application.errors import NoTowersSelectedError, SimulationNotFoundError
from src.config import CoverageSettings, get_settings

logger = logging.getLogger(__name__)

PENDING_SIMULATION_ID = "new"
START_PROGRESS = 10.0
END_PROGRESS = 90.0


class SimulationRequest(BaseModel):
    """Inputs for a new simulation, as received from the record layer."""

    name: str
    description: str = ""
    area: GeoArea
    parameters: SimulationParameters | None = None
    tower_ids: tuple[str, ...] = Field(alias="towerIds")
    grid_resolution: int | None = Field(default=None, alias="gridResolution")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SimulationService:
    """Runs, re-runs and queries coverage simulations."""

    def __init__(
        self,
        towers: TowerRepository,
        simulations: SimulationRepository,
        subscriber: ProgressSubscriber | None = None,
        settings: CoverageSettings | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.towers = towers
        self.simulations = simulations
        self.subscriber = subscriber
        self.settings = settings if settings is not None else get_settings()
        self.executor = executor

    # -----------------------------------------------------------------------
    # New simulation
    # -----------------------------------------------------------------------
    def run(
        self,
        request: SimulationRequest,
        cancel_token: CancellationToken | None = None,
    ) -> SimulationRecord:
        """Simulate coverage for the request and persist the record.

        Raises:
            NoTowersSelectedError: If none of request.tower_ids resolve
            CoverageError: Any validation, cancellation or abort error from
                the engine (after publishing a failure event)
        """
        towers = self.towers.list_towers(ids=request.tower_ids)
        if not towers:
            raise NoTowersSelectedError("No valid towers provided")

        grid_resolution = (
            request.grid_resolution
            if request.grid_resolution is not None
            else self.settings.default_grid_resolution
        )
        parameters = (
            request.parameters
            if request.parameters is not None
            else self.default_parameters()
        )

        self._publish(PENDING_SIMULATION_ID, START_PROGRESS, "Starting simulation...")
        try:
            result = self._simulate(
                request.area,
                towers,
                parameters,
                grid_resolution,
                cancel_token,
                self._on_engine_progress,
            )
        except CoverageError as e:
            logger.warning("Simulation %r failed: %s", request.name, e)
            self._publish(
                PENDING_SIMULATION_ID, 0.0, "Simulation failed", error=str(e)
            )
            raise

        record = self.simulations.save(
            SimulationRecord(
                name=request.name,
                description=request.description,
                area=request.area,
                parameters=parameters,
                tower_ids=tuple(t.id for t in towers),
                grid_resolution=result.grid_resolution,
                coverage_data=result.points,
                statistics=result.statistics,
            )
        )
        self._publish(record.id or "", 100.0, "Simulation completed successfully")
        logger.info("Simulation %s saved (%d points)", record.id, len(result.points))
        return record

    # -----------------------------------------------------------------------
    # Re-run
    # -----------------------------------------------------------------------
    def rerun(self, simulation_id: str) -> SimulationRecord:
        """Recompute a stored simulation with its stored inputs.

        Publishes no progress events.

        Raises:
            SimulationNotFoundError: If no record has simulation_id
        """
        record = self.simulations.get(simulation_id)
        if record is None:
            raise SimulationNotFoundError(simulation_id)

        towers = self.towers.list_towers(ids=record.tower_ids)
        result = self._simulate(
            record.area, towers, record.parameters, record.grid_resolution, None, None
        )
        updated = record.model_copy(
            update={"coverage_data": result.points, "statistics": result.statistics}
        )
        logger.info("Simulation %s re-run", simulation_id)
        return self.simulations.save(updated)

    # -----------------------------------------------------------------------
    # Single point
    # -----------------------------------------------------------------------
    def point_coverage(self, latitude: float, longitude: float) -> CoveragePoint:
        """Best server at one location across all active towers.

        Each tower uses its own path loss exponent; bars use the configured
        default receiver sensitivity.
        """
        point = GeoPoint(latitude=latitude, longitude=longitude)
        towers = self.towers.list_towers(status=TowerStatus.ACTIVE)
        return evaluate_point(
            point.latitude,
            point.longitude,
            towers,
            self.settings.default_receiver_sensitivity,
        )

    # -----------------------------------------------------------------------
    # Inventory
    # -----------------------------------------------------------------------
    def tower_statistics(self) -> TowerInventory:
        """Counts over every stored tower, whatever its status."""
        return TowerInventory.from_towers(self.towers.list_towers())

    def default_parameters(self) -> SimulationParameters:
        """Environment profile used when a request carries none."""
        return SimulationParameters(
            path_loss_exponent=self.settings.default_path_loss_exponent,
            receiver_sensitivity=self.settings.default_receiver_sensitivity,
            grid_resolution=self.settings.default_grid_resolution,
        )

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------
    def _simulate(
        self,
        area: GeoArea,
        towers: list[Tower],
        parameters: SimulationParameters,
        grid_resolution: int,
        cancel_token: CancellationToken | None,
        on_progress: ProgressCallback | None,
    ) -> CoverageResult:
        with self._executor() as executor:
            return generate_coverage_data(
                area,
                towers,
                parameters,
                grid_resolution,
                on_progress,
                executor=executor,
                chunk_size=self.settings.chunk_size,
                cancel_token=cancel_token,
                progress_every=self.settings.progress_every,
            )

    @contextmanager
    def _executor(self) -> Iterator[Executor | None]:
        if self.executor is not None or self.settings.max_workers is None:
            yield self.executor
            return
        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
            yield pool

    def _on_engine_progress(self, event: ProgressEvent) -> None:
        scaled = min(END_PROGRESS, START_PROGRESS + event.percent * 0.8)
        self._publish(PENDING_SIMULATION_ID, scaled, event.message)

    def _publish(
        self,
        simulation_id: str,
        progress: float,
        message: str,
        error: str | None = None,
    ) -> None:
        if self.subscriber is None:
            return
        event = SimulationProgress(
            simulation_id=simulation_id,
            progress=progress,
            message=message,
            error=error,
        )
        try:
            self.subscriber.publish(event)
        except Exception:
            logger.exception("Progress subscriber failed for %s", simulation_id)
