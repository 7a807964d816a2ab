"""Shared constants used by both scripts and tests.

This package provides a dependency-free location for sample data that needs to
be shared across packages without creating a scripts -> tests dependency.
"""

from __future__ import annotations
