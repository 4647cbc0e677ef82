"""
Configuration helpers for the local data store.

Settings are read once from environment variables so that contexts, the codec
and the entry points never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import logging
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    database_url: str
    strict_decoding: bool
    unique_keys: bool
    resolve_create_conflicts: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///localstore.db").strip(),
        strict_decoding=_bool(os.getenv("LOCALSTORE_STRICT_DECODING"), True),
        unique_keys=_bool(os.getenv("LOCALSTORE_UNIQUE_KEYS"), True),
        resolve_create_conflicts=_bool(os.getenv("LOCALSTORE_RESOLVE_CREATE_CONFLICTS"), True),
        log_level=(os.getenv("LOCALSTORE_LOG_LEVEL") or "WARNING").upper(),
    )


def configure_logging() -> None:
    """Apply the configured level to the package logger (entry points only)."""
    settings = get_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("localstore").setLevel(level)
