"""Runtime configuration: env-driven.

Centralized settings using pydantic-settings.  Reads from a .env file and
COMMITLEDGER_* environment variables.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Standard logging level names accepted by ``--log-level``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LedgerSettings(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export COMMITLEDGER_LOG_LEVEL=DEBUG
        export COMMITLEDGER_STORE_PATH=/data/builds.db
        export COMMITLEDGER_SKIP_UNKNOWN_COMMITS=true

    Or via .env file::

        COMMITLEDGER_MAX_LOGS=500
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="COMMITLEDGER_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: LogLevel = LogLevel.INFO

    # Storage
    store_path: Path = Path(".commitledger/builds.db")

    # Recording
    max_commits: int = Field(default=200, ge=0)

    # Reference lookup
    max_logs: int = Field(default=200, ge=0)
    skip_unknown_commits: bool = False
    latest_build_if_not_found: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


# Module-level singleton: import as `from commitledger.config import settings`
settings = LedgerSettings()
