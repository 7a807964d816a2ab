"""Coverage Bounded Context - Error Hierarchy.

Custom exceptions for coverage simulations.

Validation errors are raised synchronously before any grid point is computed.
Once a scan is running, cancellation is the only recoverable condition; any
arithmetic fault aborts the whole simulation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.geodesy.value_objects import GeoArea


class CoverageError(Exception):
    """Base error for coverage operations."""


# ---------------------------------------------------------------------------
# Input validation errors
# ---------------------------------------------------------------------------
class InvalidAreaError(CoverageError):
    """Area corners do not span a positive latitude and longitude range.

    Attributes:
        area: The offending GeoArea
    """

    def __init__(self, area: "GeoArea") -> None:
        self.area = area
        super().__init__(
            f"northEast ({area.north_east.latitude:.6f}, "
            f"{area.north_east.longitude:.6f}) is not strictly north-east of "
            f"southWest ({area.south_west.latitude:.6f}, "
            f"{area.south_west.longitude:.6f})"
        )


class InvalidGridResolutionError(CoverageError):
    """Grid resolution is not a positive integer."""

    def __init__(self, grid_resolution: object) -> None:
        self.grid_resolution = grid_resolution
        super().__init__(
            f"grid_resolution must be a positive integer, got {grid_resolution!r}"
        )


class InvalidPropagationInputError(CoverageError):
    """Propagation model inputs are negative, zero or non-finite where not allowed."""


class InvalidTowerError(CoverageError):
    """Tower parameters cannot drive the propagation model.

    Attributes:
        tower_id: Identifier of the offending tower
    """

    def __init__(self, tower_id: str, reason: str) -> None:
        self.tower_id = tower_id
        super().__init__(f"Tower {tower_id}: {reason}")


# ---------------------------------------------------------------------------
# Mid-flight errors
# ---------------------------------------------------------------------------
class SimulationCancelledError(CoverageError):
    """Simulation was cancelled before all grid points were evaluated.

    Attributes:
        processed: Points completed when cancellation was observed
        total: Points the full grid would have produced
    """

    def __init__(self, processed: int, total: int) -> None:
        self.processed = processed
        self.total = total
        super().__init__(f"Simulation cancelled after {processed}/{total} points")


class SimulationAbortedError(CoverageError):
    """Arithmetic fault during the scan; no partial result is produced."""
