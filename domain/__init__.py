"""Tower Coverage Domain Layer.

This package contains the core business logic organized by bounded contexts:
- geodesy: Geographic primitives, great-circle distance, area
- coverage: RF propagation, best-server selection, coverage statistics
"""

# Imports alphabetized per project style (isort)
from domain import coverage, geodesy

__all__ = ["coverage", "geodesy"]
