"""
Supamock Configuration Module.

Handles emulator settings: scheduling defaults, table creation policy and
log level. Uses pydantic-settings for validation and type safety.
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmulatorSettings(BaseSettings):
    """Emulator settings, read from SUPAMOCK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SUPAMOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING", description="Level applied to the 'supamock' logger")
    auth_replay_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Delay before scripted auth events are replayed to a new subscriber",
    )
    realtime_default_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Delay used for realtime events added without an explicit delay",
    )
    create_missing_tables: bool = Field(
        default=True,
        description=(
            "If true, table() creates a store entry for unknown tables so inserts persist. "
            "If false, builders on unknown tables work on a detached empty entry."
        ),
    )

    def to_dict(self) -> dict[str, object]:
        """Return settings as a plain dictionary."""
        return {
            "log_level": self.log_level,
            "auth_replay_delay_ms": self.auth_replay_delay_ms,
            "realtime_default_delay_ms": self.realtime_default_delay_ms,
            "create_missing_tables": self.create_missing_tables,
        }


@lru_cache
def get_settings() -> EmulatorSettings:
    """Get cached settings instance."""
    return EmulatorSettings()


def configure_logging(settings: EmulatorSettings | None = None) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    settings = settings or get_settings()
    logger = logging.getLogger("supamock")
    logger.setLevel(settings.log_level.upper())
    return logger
