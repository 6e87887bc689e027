import pytest

from config.settings import MS_PER_DAY
from protouch.storage.kv_store import InMemoryKeyValueStore, SQLiteKeyValueStore

T0 = 1_700_000_000_000


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now_ms: int = T0):
        self.now = now_ms

    def now_ms(self) -> int:
        return self.now

    def advance_days(self, days: float) -> None:
        self.now += int(days * MS_PER_DAY)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def sqlite_store(tmp_path):
    return SQLiteKeyValueStore(str(tmp_path / "protouch.db"))

