from unittest.mock import AsyncMock

import pytest

from config.settings import ALL_STORE_KEYS, STORE_REMINDERS, STORE_SAVED_TIPS, STORE_SETTINGS
from protouch.core.coordinator import AppCoordinator
from protouch.core.errors import StorageError
from protouch.settings.repository import AppSettings
from protouch.storage.kv_store import InMemoryKeyValueStore, SQLiteKeyValueStore


@pytest.fixture
def coordinator(memory_store, clock):
    return AppCoordinator(store=memory_store, clock=clock)


async def populate(coordinator):
    await coordinator.reminder_repo.create("Gmail", 30)
    await coordinator.saved_tips_repo.toggle("1")
    await coordinator.settings_repo.update(vibration=False)


@pytest.mark.asyncio
async def test_initialize_loads_settings_once(memory_store, clock):
    await AppCoordinator(store=memory_store).settings_repo.update(hide_by_default=False)
    coordinator = AppCoordinator(store=memory_store, clock=clock)

    loaded = await coordinator.initialize()

    assert coordinator.initialized
    assert loaded.hide_by_default is False
    assert coordinator.app_settings is loaded
    assert coordinator.password_generator().visible is True


@pytest.mark.asyncio
async def test_delete_app_data_clears_every_key(coordinator, memory_store):
    await populate(coordinator)
    assert sorted(await memory_store.keys()) == sorted(ALL_STORE_KEYS)

    await coordinator.delete_app_data()

    assert await memory_store.keys() == []
    assert coordinator.app_settings == AppSettings()

    # Fresh repositories, no in-memory cache
    fresh = AppCoordinator(store=memory_store)
    assert await fresh.initialize() == AppSettings()
    assert await fresh.reminder_repo.list_all() == []
    assert await fresh.saved_tips_repo.list_saved() == []


@pytest.mark.asyncio
async def test_delete_app_data_issues_one_remove_per_key(coordinator, memory_store):
    memory_store.remove = AsyncMock(wraps=memory_store.remove)

    await coordinator.delete_app_data()

    removed = [set(call.args[0]) for call in memory_store.remove.await_args_list]
    assert removed == [{STORE_REMINDERS}, {STORE_SAVED_TIPS}, {STORE_SETTINGS}]


@pytest.mark.asyncio
async def test_delete_app_data_is_not_atomic_across_keys(clock):
    store = InMemoryKeyValueStore()
    coordinator = AppCoordinator(store=store, clock=clock)
    await populate(coordinator)

    original_remove = store.remove

    async def flaky_remove(keys):
        keys = set(keys)
        if STORE_SAVED_TIPS in keys:
            raise StorageError("interrupted")
        await original_remove(keys)

    store.remove = flaky_remove

    await coordinator.delete_app_data()

    assert await store.get(STORE_REMINDERS) is None
    assert await store.get(STORE_SAVED_TIPS) is not None
    assert await store.get(STORE_SETTINGS) is None


@pytest.mark.asyncio
async def test_initialize_with_unusable_store_falls_back_to_defaults(tmp_path):
    store = SQLiteKeyValueStore(str(tmp_path / "missing-dir" / "store.db"))
    coordinator = AppCoordinator(store=store)

    assert await coordinator.initialize() == AppSettings()
    assert await coordinator.reminder_repo.list_all() == []
    assert coordinator.initialized


def test_default_store_is_sqlite(tmp_path, monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "DB_PATH", tmp_path / "default.db")

    coordinator = AppCoordinator()

    assert coordinator.store.db_path == str(tmp_path / "default.db")
