"""Application services orchestrating coverage simulations.

Service exported for simplified imports.
"""

from .simulation_service import SimulationRequest, SimulationService

__all__ = ["SimulationRequest", "SimulationService"]
