"""Infrastructure adapters for the coverage bounded context.

In-memory implementations of the coverage ports, used by tests and by
applications that embed the engine without a database.
"""

from .memory_adapter import (
    InMemorySimulationRepository,
    InMemoryTowerRepository,
    RecordingProgressSubscriber,
)

__all__ = [
    "InMemorySimulationRepository",
    "InMemoryTowerRepository",
    "RecordingProgressSubscriber",
]
