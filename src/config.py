"""Engine configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoverageSettings(BaseSettings):
    """Coverage engine settings loaded from ``COVERAGE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="COVERAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Simulation defaults
    default_grid_resolution: int = Field(
        default=100, gt=0, description="Grid subdivisions per axis"
    )
    default_path_loss_exponent: float = Field(
        default=3.0, ge=0, description="Network-wide path loss exponent"
    )
    default_receiver_sensitivity: float = Field(
        default=-100.0, lt=0, description="Receiver sensitivity in dBm"
    )

    # Execution
    chunk_size: int = Field(default=2048, gt=0, description="Grid points per chunk")
    progress_every: int = Field(
        default=100, gt=0, description="Points between progress events"
    )
    max_workers: int | None = Field(
        default=None, description="Worker threads; unset runs sequentially"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int | None) -> int | None:
        """Treat 0 or 1 worker as sequential execution."""
        if v is not None and v < 0:
            raise ValueError(f"max_workers must be non-negative, got {v}")
        if v is not None and v <= 1:
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> CoverageSettings:
    """Get cached settings instance."""
    return CoverageSettings()
