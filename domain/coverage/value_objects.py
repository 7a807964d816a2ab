"""Coverage Bounded Context - Value Objects.

Immutable data structures for towers, simulation parameters and results.
Range validation occurs at construction time via Pydantic; cross-object
checks (area ordering, grid resolution) are done by the engine.

Serialized field names (``by_alias=True``) are the camelCase names used by
stored simulation records and must not change.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from enum import Enum

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.geodesy.value_objects import GeoPoint

_RECORD_CONFIG = ConfigDict(
    frozen=True, alias_generator=to_camel, populate_by_name=True
)


class TowerStatus(str, Enum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"


class EnvironmentType(str, Enum):
    URBAN = "urban"
    SUBURBAN = "suburban"
    RURAL = "rural"


# ---------------------------------------------------------------------------
# Towers
# ---------------------------------------------------------------------------
class TowerParameters(BaseModel):
    """Per-tower hardware profile (Value Object).

    Only reference_power and frequency drive the propagation model; the
    per-tower path_loss_exponent is overridden by the simulation-wide value
    during grid simulations. transmitter_power and antenna_gain are carried
    through to the propagation call but are inert.
    """

    reference_power: float = Field(default=-30.0, allow_inf_nan=False)
    path_loss_exponent: float = Field(default=3.0, ge=0, allow_inf_nan=False)
    frequency: float = Field(default=2100.0, gt=0, allow_inf_nan=False)  # MHz
    transmitter_power: float = Field(default=20.0, allow_inf_nan=False)  # dBm
    antenna_gain: float = Field(default=10.0, allow_inf_nan=False)  # dB
    antenna_height: float = Field(default=30.0, ge=0, allow_inf_nan=False)  # m

    model_config = _RECORD_CONFIG


class Tower(BaseModel):
    """Transmitting site as supplied by the tower repository (Value Object).

    The engine only reads towers; it never filters on status.
    """

    id: str
    tower_id: str
    name: str
    location: GeoPoint
    network: str
    technology: tuple[str, ...] = ("4G",)
    parameters: TowerParameters = Field(default_factory=TowerParameters)
    status: TowerStatus = TowerStatus.ACTIVE
    capacity: int = Field(default=1000, ge=0)
    coverage_radius: float = Field(default=5000.0, ge=0)  # m, informational

    model_config = _RECORD_CONFIG


# ---------------------------------------------------------------------------
# Simulation Parameters
# ---------------------------------------------------------------------------
class SimulationParameters(BaseModel):
    """Environment profile shared by every tower of a simulation.

    path_loss_exponent overrides each tower's own exponent: the environment
    determines attenuation, towers determine reference power and frequency.
    grid_resolution is validated by the engine, not here.
    """

    path_loss_exponent: float = Field(default=3.0, ge=0, allow_inf_nan=False)
    receiver_sensitivity: float = Field(default=-100.0, lt=0, allow_inf_nan=False)
    grid_resolution: int = 100
    environment_type: EnvironmentType = EnvironmentType.SUBURBAN

    model_config = _RECORD_CONFIG


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
class CoveragePoint(BaseModel):
    """Best-server estimate at one grid point.

    signal_strength is -inf and serving_tower is None when no tower was
    evaluated. serving_tower holds the tower id only.
    """

    latitude: float
    longitude: float
    signal_strength: float
    signal_bars: int = Field(ge=0, le=5)
    network: str = ""
    serving_tower: str | None = None
    distance: float = 0.0  # m to serving tower

    model_config = _RECORD_CONFIG

    @property
    def is_covered(self) -> bool:
        return self.signal_bars > 0


class CoverageStatistics(BaseModel):
    """Area-level reduction of a coverage point sequence.

    Percentages are of grid points (0-100). average_signal_strength is None
    when no point had a finite signal (empty tower set).
    """

    overall_coverage: float
    strong_coverage: float
    weak_coverage: float
    no_coverage: float
    average_signal_strength: float | None
    coverage_area: float  # km²

    model_config = _RECORD_CONFIG

    @property
    def moderate_coverage(self) -> float:
        """Percentage of points with exactly 3 bars."""
        return self.overall_coverage - self.strong_coverage - self.weak_coverage


class CoverageResult(BaseModel):
    """Points in row-major (i, j) order plus their statistics."""

    points: tuple[CoveragePoint, ...]
    statistics: CoverageStatistics
    grid_resolution: int

    model_config = _RECORD_CONFIG

    @property
    def shape(self) -> tuple[int, int]:
        side = self.grid_resolution + 1
        return (side, side)

    def signal_grid(self) -> NDArray[np.float64]:
        """Signal strengths as a (rows=latitude, cols=longitude) array.

        Row 0 is the southern edge. Read-only; -inf where no tower served.
        """
        grid = np.array(
            [p.signal_strength for p in self.points], dtype=np.float64
        ).reshape(self.shape)
        grid.flags.writeable = False
        return grid

    def bars_grid(self) -> NDArray[np.int8]:
        """Bar ratings with the same layout as signal_grid()."""
        grid = np.array([p.signal_bars for p in self.points], dtype=np.int8).reshape(
            self.shape
        )
        grid.flags.writeable = False
        return grid

    def network_breakdown(self) -> dict[str, int]:
        """Covered points per serving network, in first-seen order."""
        counts = Counter(p.network for p in self.points if p.is_covered)
        return dict(counts)


# ---------------------------------------------------------------------------
# Tower Inventory
# ---------------------------------------------------------------------------
KNOWN_NETWORKS: tuple[str, ...] = ("telco1", "telco2", "telco3", "multi")
KNOWN_TECHNOLOGIES: tuple[str, ...] = ("2G", "3G", "4G", "5G")


class TowerInventory(BaseModel):
    """Tower counts by network, technology and status.

    Known networks and technologies are always reported, with zero counts
    when absent; unknown networks are appended in first-seen order. A tower
    listing several technologies counts once under each of them.
    """

    total_towers: int
    networks: dict[str, int]
    technologies: dict[str, int]
    active_towers: int
    maintenance_towers: int

    model_config = _RECORD_CONFIG

    @classmethod
    def from_towers(cls, towers: Iterable[Tower]) -> TowerInventory:
        towers = list(towers)
        networks = dict.fromkeys(KNOWN_NETWORKS, 0)
        technologies = dict.fromkeys(KNOWN_TECHNOLOGIES, 0)
        for tower in towers:
            networks[tower.network] = networks.get(tower.network, 0) + 1
            for tech in set(tower.technology):
                if tech in technologies:
                    technologies[tech] += 1
        statuses = Counter(t.status for t in towers)
        return cls(
            total_towers=len(towers),
            networks=networks,
            technologies=technologies,
            active_towers=statuses[TowerStatus.ACTIVE],
            maintenance_towers=statuses[TowerStatus.MAINTENANCE],
        )
