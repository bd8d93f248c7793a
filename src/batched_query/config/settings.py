"""Application settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..batching.models import BatchOptions, Strategy
from ..common.constants import BATCH_SIZE, DEFAULT_MAX_POOL_SIZE, DEFAULT_STRATEGY, ENV_PREFIX


class Settings(BaseSettings):
    """Environment-driven defaults for batched execution."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Batching
    batch_size: int = Field(
        default=BATCH_SIZE,
        gt=0,
        description="Number of items per lookup call",
    )
    max_concurrent: int = Field(
        default=DEFAULT_MAX_POOL_SIZE,
        gt=0,
        description="Maximum concurrent lookup calls (connection pool size)",
    )
    strategy: Strategy = Field(
        default=Strategy(DEFAULT_STRATEGY),
        description="Execution strategy (auto, parallel, sequential, chunked)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file path",
    )

    def batch_options(self) -> BatchOptions:
        """Build batch options from these settings."""
        return BatchOptions.build(
            batch_size=self.batch_size,
            max_concurrent=self.max_concurrent,
            strategy=self.strategy,
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
