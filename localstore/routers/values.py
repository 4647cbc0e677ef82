from __future__ import annotations

import json
from typing import Any, Iterator

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from localstore.core.errors import (
    DecodingError,
    DuplicateKeyError,
    EncodingError,
    PersistenceError,
    RecordLookupError,
)
from localstore.repositories.sql_context import open_context
from localstore.services.events import ChangeNotifier
from localstore.services.store import DataStore

router = APIRouter(prefix="/values", tags=["values"])


class ValuePayload(BaseModel):
    value: Any = None


def _get_notifier(request: Request) -> ChangeNotifier:
    notifier = getattr(getattr(request.app, "state", None), "notifier", None)
    if notifier is None:
        raise RuntimeError("ChangeNotifier not configured")
    return notifier


def get_store(request: Request) -> Iterator[DataStore]:
    with open_context() as context:
        yield DataStore(context, _get_notifier(request))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not allowed")


@router.get("/{key}/exists")
def value_exists(key: str, store: DataStore = Depends(get_store)):
    return {"key": key, "exists": store.exists(key)}


@router.get("/{key}")
def read_value(key: str, default: str | None = None, store: DataStore = Depends(get_store)):
    default_value = None
    if default is not None:
        try:
            default_value = json.loads(default, parse_constant=_reject_constant)
        except ValueError:
            raise HTTPException(400, "default must be valid JSON")
    try:
        value = store.get(key, default_value, as_type=Any)
        # persist the record created on a miss
        store.context.save()
    except EncodingError as exc:
        raise HTTPException(400, str(exc))
    except DecodingError as exc:
        raise HTTPException(422, str(exc))
    except DuplicateKeyError as exc:
        raise HTTPException(409, str(exc))
    except (RecordLookupError, PersistenceError) as exc:
        raise HTTPException(503, str(exc))
    return {"key": key, "value": value}


@router.put("/{key}")
def write_value(key: str, payload: ValuePayload, store: DataStore = Depends(get_store)):
    try:
        store.write(key, payload.value)
    except EncodingError as exc:
        raise HTTPException(400, str(exc))
    except DuplicateKeyError as exc:
        raise HTTPException(409, str(exc))
    except (RecordLookupError, PersistenceError) as exc:
        raise HTTPException(503, str(exc))
    return {"key": key, "value": payload.value}
