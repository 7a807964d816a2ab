"""Tests for the in-memory port adapters."""

from __future__ import annotations

import pytest

from domain.coverage.engine import generate_coverage_data
from domain.coverage.repositories import SimulationProgress, SimulationRecord
from domain.coverage.value_objects import TowerStatus
from src.infrastructure.coverage import (
    InMemorySimulationRepository,
    InMemoryTowerRepository,
    RecordingProgressSubscriber,
)
from tests.conftest_utils import UNIT_AREA, make_params, make_tower


class TestInMemoryTowerRepository:
    def test_preserves_insertion_order(self) -> None:
        repo = InMemoryTowerRepository(
            [make_tower("c", 0, 0), make_tower("a", 0, 0), make_tower("b", 0, 0)]
        )
        assert [t.id for t in repo.list_towers()] == ["c", "a", "b"]
        # Requested id order does not reorder results
        assert [t.id for t in repo.list_towers(ids=["b", "c"])] == ["c", "b"]

    def test_filters_by_status(self) -> None:
        repo = InMemoryTowerRepository(
            [
                make_tower("on", 0, 0),
                make_tower("off", 0, 0, status=TowerStatus.INACTIVE),
                make_tower("fix", 0, 0, status=TowerStatus.MAINTENANCE),
            ]
        )
        assert [t.id for t in repo.list_towers(status=TowerStatus.ACTIVE)] == ["on"]
        assert [
            t.id for t in repo.list_towers(ids=["off", "fix"], status=TowerStatus.INACTIVE)
        ] == ["off"]

    def test_rejects_duplicate_ids(self) -> None:
        repo = InMemoryTowerRepository([make_tower("a", 0, 0)])
        with pytest.raises(ValueError, match="Duplicate"):
            repo.add(make_tower("a", 1, 1))


class TestInMemorySimulationRepository:
    def _record(self) -> SimulationRecord:
        result = generate_coverage_data(UNIT_AREA, [], make_params(), 1)
        return SimulationRecord(
            name="empty",
            area=UNIT_AREA,
            parameters=make_params(),
            tower_ids=(),
            grid_resolution=1,
            coverage_data=result.points,
            statistics=result.statistics,
        )

    def test_save_assigns_id(self) -> None:
        repo = InMemorySimulationRepository()
        saved = repo.save(self._record())
        assert saved.id
        assert repo.get(saved.id) == saved
        assert len(repo) == 1

    def test_get_missing_returns_none(self) -> None:
        assert InMemorySimulationRepository().get("missing") is None

    def test_record_serializes_with_record_field_names(self) -> None:
        dumped = self._record().model_dump(by_alias=True)
        assert {"towers", "gridResolution", "coverageData", "createdAt"} <= set(dumped)
        assert dumped["statistics"]["averageSignalStrength"] is None
        assert dumped["coverageData"][0]["signalStrength"] == float("-inf")


def test_recording_subscriber_keeps_events() -> None:
    subscriber = RecordingProgressSubscriber()
    subscriber.publish(SimulationProgress(simulation_id="new", progress=10, message="a"))
    subscriber.publish(SimulationProgress(simulation_id="new", progress=55, message="b"))
    assert subscriber.progress_values == [10, 55]
