#!/usr/bin/env python3
"""Run a coverage simulation over the shared sample tower network.

Usage:
    python scripts/simulate_sample.py [grid_resolution]

Configuration:
    COVERAGE_* environment variables (see src/config.py), e.g.
    COVERAGE_MAX_WORKERS=4 COVERAGE_LOG_LEVEL=DEBUG

Output:
    Progress events and the resulting coverage statistics on stdout.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running from a checkout without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from domain.coverage.repositories import SimulationProgress  # noqa: E402
from domain.coverage.value_objects import Tower, TowerStatus  # noqa: E402
from domain.geodesy.value_objects import GeoArea  # noqa: E402
from shared.sample_network import SAMPLE_AREA, SAMPLE_TOWERS  # noqa: E402
from src.application import SimulationRequest, SimulationService  # noqa: E402
from src.config import get_settings  # noqa: E402
from src.infrastructure.coverage import (  # noqa: E402
    InMemorySimulationRepository,
    InMemoryTowerRepository,
)
from src.logging_config import configure_logging  # noqa: E402


class PrintingSubscriber:
    """Progress subscriber that prints one line per event."""

    def publish(self, event: SimulationProgress) -> None:
        print(f"  [{event.progress:5.1f}%] {event.message}")


def main(argv: list[str]) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    grid_resolution = int(argv[1]) if len(argv) > 1 else None
    towers = [Tower.model_validate(record) for record in SAMPLE_TOWERS]
    tower_repo = InMemoryTowerRepository(towers)
    active = tower_repo.list_towers(status=TowerStatus.ACTIVE)

    service = SimulationService(
        tower_repo,
        InMemorySimulationRepository(),
        PrintingSubscriber(),
        settings=settings,
    )
    request = SimulationRequest(
        name="Sample network",
        area=GeoArea.model_validate(SAMPLE_AREA),
        tower_ids=tuple(t.id for t in active),
        grid_resolution=grid_resolution,
    )

    inventory = service.tower_statistics()
    print("=" * 60)
    print(f"Inventory: {inventory.total_towers} towers")
    print(f"  networks:     {inventory.networks}")
    print(f"  technologies: {inventory.technologies}")
    print(f"Simulating {len(active)} active towers")
    print("=" * 60)
    record = service.run(request)

    stats = record.statistics
    print()
    print(f"Points:            {len(record.coverage_data)}")
    print(f"Overall coverage:  {stats.overall_coverage:.1f}%")
    print(f"Strong coverage:   {stats.strong_coverage:.1f}%")
    print(f"Weak coverage:     {stats.weak_coverage:.1f}%")
    print(f"No coverage:       {stats.no_coverage:.1f}%")
    if stats.average_signal_strength is not None:
        print(f"Average signal:    {stats.average_signal_strength:.1f} dBm")
    print(f"Covered area:      {stats.coverage_area:.2f} km²")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
