from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the localstore package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from localstore.core import config as core_config  # noqa: E402
from localstore.db import create_tables  # noqa: E402
from localstore.db import session as db_session  # noqa: E402

_ENV_VARS = (
    "DATABASE_URL",
    "LOCALSTORE_STRICT_DECODING",
    "LOCALSTORE_UNIQUE_KEYS",
    "LOCALSTORE_RESOLVE_CREATE_CONFLICTS",
    "LOCALSTORE_LOG_LEVEL",
)


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test from default settings, whatever the outer environment says."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and create the schema."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _clear_caches()

    engine = db_session.get_engine()
    create_tables.drop_all()
    create_tables.create_all()

    yield db_file

    try:
        create_tables.drop_all()
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    _clear_caches()
