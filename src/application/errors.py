"""Application-level errors raised by SimulationService."""

from __future__ import annotations

from domain.coverage.errors import CoverageError


class SimulationNotFoundError(CoverageError):
    """No stored simulation has the requested id."""

    def __init__(self, simulation_id: str) -> None:
        self.simulation_id = simulation_id
        super().__init__(f"Simulation not found: {simulation_id}")


class NoTowersSelectedError(CoverageError):
    """Tower selection resolved to no towers."""
