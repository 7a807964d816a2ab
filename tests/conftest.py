"""Root pytest configuration for all tests.

Provides settings isolation: CoverageSettings is cached process-wide by
get_settings(), and COVERAGE_* variables from the developer's shell must not
leak into test expectations.
"""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest

from src.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear COVERAGE_* env vars and the settings cache around every test."""
    for key in list(os.environ):
        if key.upper().startswith("COVERAGE_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
