"""Tests for CoverageSettings and logging setup."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from src.config import CoverageSettings, get_settings
from src.logging_config import LOGGER_NAMES, configure_logging


class TestCoverageSettings:
    def test_defaults(self) -> None:
        settings = CoverageSettings()
        assert settings.default_grid_resolution == 100
        assert settings.default_path_loss_exponent == 3.0
        assert settings.default_receiver_sensitivity == -100.0
        assert settings.chunk_size == 2048
        assert settings.progress_every == 100
        assert settings.max_workers is None
        assert settings.log_level == "INFO"

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COVERAGE_DEFAULT_GRID_RESOLUTION", "50")
        monkeypatch.setenv("COVERAGE_MAX_WORKERS", "4")
        monkeypatch.setenv("COVERAGE_LOG_LEVEL", "debug")
        settings = CoverageSettings()
        assert settings.default_grid_resolution == 50
        assert settings.max_workers == 4
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("workers", [0, 1])
    def test_single_worker_means_sequential(self, workers: int) -> None:
        assert CoverageSettings(max_workers=workers).max_workers is None

    @pytest.mark.parametrize(
        "field, value",
        [
            ("default_grid_resolution", 0),
            ("default_receiver_sensitivity", 0.0),
            ("chunk_size", -1),
            ("progress_every", 0),
            ("max_workers", -2),
            ("log_level", "LOUD"),
        ],
    )
    def test_invalid_values_rejected(self, field: str, value: object) -> None:
        with pytest.raises(ValidationError):
            CoverageSettings(**{field: value})

    def test_get_settings_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        monkeypatch.setenv("COVERAGE_CHUNK_SIZE", "7")
        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().chunk_size == 7


def test_configure_logging_is_idempotent() -> None:
    saved = {
        name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers))
        for name in LOGGER_NAMES
    }
    try:
        configure_logging("DEBUG")
        configure_logging("WARNING")
        for name in LOGGER_NAMES:
            logger = logging.getLogger(name)
            assert logger.level == logging.WARNING
            named = [h for h in logger.handlers if h.get_name() == "coverage-stream"]
            assert len(named) == 1
    finally:
        for name, (level, handlers) in saved.items():
            logger = logging.getLogger(name)
            logger.setLevel(level)
            logger.handlers[:] = handlers
