"""Single source of truth for the sample tower network.

Used by:
- scripts/simulate_sample.py (demo run)
- tests/conftest_utils.py (realistic multi-tower coverage tests)

Records use the stored (camelCase) field names, exactly as the tower record
layer would hand them over. Towers are listed in repository order; that order
decides best-server ties.
"""

from __future__ import annotations

from typing import Any

# Central São Paulo, ~2.2 km x ~2.0 km
SAMPLE_AREA: dict[str, Any] = {
    "northEast": {"latitude": -23.55, "longitude": -46.64},
    "southWest": {"latitude": -23.57, "longitude": -46.66},
}

SAMPLE_TOWERS: list[dict[str, Any]] = [
    {
        "id": "t1",
        "towerId": "SP-001",
        "name": "Paulista North",
        "location": {"latitude": -23.555, "longitude": -46.655},
        "network": "telco1",
        "technology": ["4G", "5G"],
        "parameters": {"referencePower": -30, "frequency": 2100},
    },
    {
        "id": "t2",
        "towerId": "SP-002",
        "name": "Liberdade",
        "location": {"latitude": -23.565, "longitude": -46.645},
        "network": "telco2",
        "technology": ["4G"],
        "parameters": {"referencePower": -25, "frequency": 2100},
    },
    {
        "id": "t3",
        "towerId": "SP-003",
        "name": "Bela Vista",
        "location": {"latitude": -23.560, "longitude": -46.650},
        "network": "telco3",
        "technology": ["3G", "4G"],
        "parameters": {"referencePower": -30, "frequency": 900},
    },
    {
        "id": "t4",
        "towerId": "SP-004",
        "name": "Consolação",
        "location": {"latitude": -23.552, "longitude": -46.662},
        "network": "multi",
        "technology": ["4G"],
        "parameters": {"referencePower": -30, "frequency": 1800},
        "status": "maintenance",
    },
]

SAMPLE_TOWER_COUNT: int = len(SAMPLE_TOWERS)
