import sqlite3

import pytest

from protouch.core.errors import StorageError
from protouch.storage.kv_store import SQLiteKeyValueStore


@pytest.mark.asyncio
async def test_sqlite_store_get_missing_key_returns_none(sqlite_store):
    assert await sqlite_store.get("protouch.settings") is None


@pytest.mark.asyncio
async def test_sqlite_store_set_overwrites_previous_value(sqlite_store):
    await sqlite_store.set("k", '{"a": 1}')
    await sqlite_store.set("k", '{"a": 2}')

    assert await sqlite_store.get("k") == '{"a": 2}'
    assert await sqlite_store.keys() == ["k"]


@pytest.mark.asyncio
async def test_sqlite_store_survives_reopen(tmp_path):
    path = str(tmp_path / "store.db")
    await SQLiteKeyValueStore(path).set("protouch.saved.tips", '["3"]')

    reopened = SQLiteKeyValueStore(path)

    assert await reopened.get("protouch.saved.tips") == '["3"]'


@pytest.mark.asyncio
async def test_sqlite_store_remove_ignores_absent_keys(sqlite_store):
    await sqlite_store.set("a", "1")
    await sqlite_store.set("b", "2")

    await sqlite_store.remove({"a", "missing"})
    await sqlite_store.remove([])

    assert await sqlite_store.get("a") is None
    assert await sqlite_store.get("b") == "2"


@pytest.mark.asyncio
async def test_sqlite_store_wraps_sqlite_errors(sqlite_store, monkeypatch):
    def broken(key):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(sqlite_store, "_get_sync", broken)

    with pytest.raises(StorageError, match="disk I/O error"):
        await sqlite_store.get("k")


def test_sqlite_store_constructor_does_not_touch_disk(tmp_path):
    path = tmp_path / "lazy.db"

    store = SQLiteKeyValueStore(str(path))

    assert not path.exists()
    assert store.initialized is False


@pytest.mark.asyncio
async def test_sqlite_store_initialize_creates_schema_once(tmp_path):
    path = tmp_path / "lazy.db"
    store = SQLiteKeyValueStore(str(path))

    await store.initialize()
    await store.initialize()

    assert path.exists()
    assert store.initialized is True
    assert await store.keys() == []


@pytest.mark.asyncio
async def test_sqlite_store_first_access_initializes(tmp_path):
    store = SQLiteKeyValueStore(str(tmp_path / "lazy.db"))

    assert await store.get("k") is None
    assert store.initialized is True


@pytest.mark.asyncio
async def test_sqlite_store_unopenable_path_raises_storage_error(tmp_path):
    store = SQLiteKeyValueStore(str(tmp_path / "missing-dir" / "store.db"))

    with pytest.raises(StorageError):
        await store.initialize()
    with pytest.raises(StorageError):
        await store.get("k")
    assert store.initialized is False


@pytest.mark.asyncio
async def test_memory_store_contract(memory_store):
    await memory_store.set("a", "1")
    await memory_store.set("b", "2")
    await memory_store.remove(["a", "zzz"])

    assert await memory_store.get("a") is None
    assert await memory_store.get("b") == "2"
    assert await memory_store.keys() == ["b"]
