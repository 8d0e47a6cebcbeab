"""
Centralized settings configuration using Pydantic BaseSettings.

All planner tunables are defined here with types, defaults, and validation.
Values come from MESOPLAN_-prefixed environment variables or a .env file.

Usage:
    from mesoplan.settings import get_settings, Settings

    # Direct access (module-level)
    settings = get_settings()
    print(settings.first_microcycle_rir)

    # Explicit settings for a single run
    context = MesocyclePlanContext(..., settings=Settings(session_overflow_policy="pack"))
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SessionOverflowPolicy(str, Enum):
    """
    What to do when a microcycle has more planned sessions than non-rest days.

    - stop: one session per non-rest day, extra sessions are dropped
    - pack: extra sessions share the earliest non-rest days
    - error: refuse to schedule the microcycle
    """

    STOP = "stop"
    PACK = "pack"
    ERROR = "error"


class Settings(BaseSettings):
    """Planner settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MESOPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, test, production",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level used by the CLI",
    )

    # -------------------------------------------------------------------------
    # Mesocycle Shape
    # -------------------------------------------------------------------------
    default_microcycle_count: int = Field(
        default=6,
        ge=2,
        le=20,
        description="Microcycles per mesocycle when the mesocycle does not say (5 accumulation + 1 deload)",
    )
    first_microcycle_rir: int = Field(
        default=4,
        ge=0,
        le=10,
        description="Target reps in reserve for the first microcycle of every mesocycle",
    )
    session_overflow_policy: SessionOverflowPolicy = Field(
        default=SessionOverflowPolicy.STOP,
        description="Scheduling behavior when sessions outnumber non-rest days",
    )

    # -------------------------------------------------------------------------
    # Volume Limits
    # -------------------------------------------------------------------------
    max_sets_per_exercise: int = Field(
        default=8,
        ge=1,
        description="Upper bound on sets for one exercise in one session",
    )
    max_sets_per_muscle_group_per_session: int = Field(
        default=10,
        ge=1,
        description="Upper bound on sets for one muscle group in one session",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Planner settings instance
    """
    return Settings()
