"""Configuration loading for Rollbook."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from rollbook.lifecycle.service import DEFAULT_RETENTION_YEARS
from rollbook.logging import DEFAULT_LOG_DIR, DEFAULT_LOG_LEVEL

ENV_PREFIX = "ROLLBOOK_"


class ConfigError(Exception):
    """Raised when configuration is invalid."""


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from e


@dataclass
class Settings:
    """Runtime settings.

    Every field can be overridden with a ``ROLLBOOK_``-prefixed environment
    variable (``ROLLBOOK_DB_PATH``, ``ROLLBOOK_RETENTION_YEARS``, ...).
    """

    db_path: str = "rollbook.db"
    retention_years: int = DEFAULT_RETENTION_YEARS
    host: str = "127.0.0.1"
    port: int = 8000
    log_dir: str = DEFAULT_LOG_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.retention_years < 1:
            raise ConfigError(
                f"{ENV_PREFIX}RETENTION_YEARS must be at least 1, got {self.retention_years}"
            )
        if not 0 < self.port < 65536:
            raise ConfigError(f"{ENV_PREFIX}PORT must be between 1 and 65535, got {self.port}")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            env: Mapping to read instead of ``os.environ`` (used by tests).

        Returns:
            Settings with defaults for every unset variable.

        Raises:
            ConfigError: If a value cannot be parsed or is out of range.
        """
        if env is None:
            env = os.environ
        defaults = cls()
        return cls(
            db_path=env.get(ENV_PREFIX + "DB_PATH", defaults.db_path),
            retention_years=_read_int(env, "RETENTION_YEARS", defaults.retention_years),
            host=env.get(ENV_PREFIX + "HOST", defaults.host),
            port=_read_int(env, "PORT", defaults.port),
            log_dir=env.get(ENV_PREFIX + "LOG_DIR", defaults.log_dir),
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level),
        )
