from __future__ import annotations

from typing import Optional

import pytest

from localstore.core.errors import DecodingError, EncodingError
from localstore.domain.bindings import StoreBinding
from localstore.repositories.context import MemoryStorageContext
from localstore.services.bindings import ValueBinding, ValueView
from localstore.services.events import ChangeNotifier
from localstore.services.store import DataStore

THEME = StoreBinding("theme", "light")


@pytest.fixture()
def store():
    return DataStore(MemoryStorageContext())


def test_view_reads_default_and_creates_record(store):
    view = ValueView(store, THEME)

    assert view.value == "light"
    assert store.exists(THEME) is True


def test_view_reflects_writes_made_elsewhere(store):
    view = ValueView(store, "count", 0)
    store.write("count", 3)
    assert view.value == 3


def test_binding_setter_persists_and_notifies(store):
    binding = ValueBinding(store, THEME)
    seen = []
    binding.subscribe(seen.append)

    binding.value = "dark"

    assert binding.value == "dark"
    assert store.get(THEME) == "dark"
    assert store.context.save_count == 1
    assert seen == ["dark"]


def test_bindings_share_notifications_through_the_notifier():
    notifier = ChangeNotifier()
    ctx = MemoryStorageContext()
    reader = ValueBinding(DataStore(ctx, notifier), "volume", 0.5)
    writer = ValueBinding(DataStore(ctx, notifier), "volume", 0.5)
    seen = []
    unsubscribe = reader.subscribe(seen.append)

    writer.value = 0.8
    unsubscribe()
    writer.value = 0.9

    assert seen == [0.8]
    assert reader.value == 0.9
    assert notifier.subscriber_count("volume") == 0


def test_value_or_default_falls_back_on_decoding_error(store):
    store.write_bytes("count", b'"not a number"')
    view = ValueView(store, "count", 0)

    with pytest.raises(DecodingError):
        view.value
    assert view.value_or_default() == 0


def test_explicit_type_is_used_for_decoding(store):
    view = ValueView(store, "ratio", None, as_type=Optional[float])
    store.write("ratio", 0.25)
    assert view.value == 0.25
    assert view.target_type == Optional[float]


def test_typed_binding_setter_rejects_wrong_type(store):
    binding = ValueBinding(store, StoreBinding("count", 0, int))
    seen = []
    binding.subscribe(seen.append)

    with pytest.raises(EncodingError):
        binding.value = "abc"

    assert binding.value == 0
    assert seen == []
