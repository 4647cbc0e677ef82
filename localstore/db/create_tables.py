"""Utility script to create the record table and its key index."""
from __future__ import annotations

from sqlalchemy import MetaData, Table, inspect
from sqlalchemy.exc import SQLAlchemyError

from localstore.core.config import get_settings
from .session import Base, get_engine
from .models import KEY_INDEX_NAME, Record


def _records_table(unique_keys: bool) -> Table:
    if unique_keys:
        return Record.__table__
    # detached copy, so the model's own index stays unique
    table = Record.__table__.to_metadata(MetaData())
    for index in table.indexes:
        if index.name == KEY_INDEX_NAME:
            index.unique = False
    return table


def key_is_unique(engine=None) -> bool:
    """Whether the existing record table rejects duplicate keys."""
    inspector = inspect(engine or get_engine())
    name = Record.__tablename__
    for index in inspector.get_indexes(name):
        if index.get("unique") and index.get("column_names") == ["key"]:
            return True
    for constraint in inspector.get_unique_constraints(name):
        if constraint.get("column_names") == ["key"]:
            return True
    return False


def create_all(unique_keys: bool | None = None) -> None:
    """Create the schema; the key index is unique unless uniqueness is disabled.

    Raises RuntimeError when uniqueness is requested but an existing table
    was built without it.
    """
    if unique_keys is None:
        unique_keys = get_settings().unique_keys
    engine = get_engine()
    if unique_keys:
        Base.metadata.create_all(bind=engine)
    else:
        _records_table(False).create(bind=engine, checkfirst=True)
    if unique_keys and not key_is_unique(engine):
        raise RuntimeError(
            f"Table {Record.__tablename__!r} has no unique index on key; "
            "rebuild it or set LOCALSTORE_UNIQUE_KEYS=0."
        )


def drop_all() -> None:
    Base.metadata.drop_all(bind=get_engine())


if __name__ == "__main__":
    try:
        create_all()
        print("Database tables created successfully.")
    except (SQLAlchemyError, RuntimeError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
