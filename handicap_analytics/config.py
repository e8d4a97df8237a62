"""Configuration helpers for analytics constants."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _Settings(BaseSettings):
    fit_sweep_steps: int = Field(default=240, ge=1)
    fit_floor_min: float = -5.0
    fit_floor_margin: float = Field(default=0.1, gt=0.0)
    eps_vis: float = Field(default=1.0, ge=0.0)

    intercept_horizon_days: int = Field(default=3650, gt=0)
    intercept_samples: int = Field(default=1600, gt=0)

    streak_gap_days: int = Field(default=14, gt=0)
    worst_holes_top_n: int = Field(default=8, gt=0)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="HANDICAP_", env_file=".env", extra="ignore"
    )


# The sweep resolution never drops below this regardless of configuration.
MIN_SWEEP_STEPS = 80


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached analytics settings."""

    return _Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = [
    "MIN_SWEEP_STEPS",
    "get_settings",
    "reset_settings_cache",
]
