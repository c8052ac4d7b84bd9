"""
Shared fixtures for cache engine unit tests.
"""
import pytest

from fiji_cache.config.settings import CacheSettings
from fiji_cache.engine import FijiCache
from fiji_cache.persist.memory_store import InMemoryTextStore
from fiji_cache.persist.sqlite_store import SQLiteTextStore


class FakeClock:
    """Injectable clock returning epoch milliseconds."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class CountingStore(InMemoryTextStore):
    """In-memory store that records reads and writes."""

    def __init__(self):
        super().__init__()
        self.reads = 0
        self.writes = 0

    def read(self, key):
        self.reads += 1
        return super().read(key)

    def write(self, key, blob):
        self.writes += 1
        super().write(key, blob)


@pytest.fixture
def clock():
    """Fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def short_store():
    return CountingStore()


@pytest.fixture
def long_store():
    return CountingStore()


@pytest.fixture
def settings():
    """Namespace T, 1s short TTL, 5s long TTL."""
    return CacheSettings(namespace="T", short_ttl=1000, long_ttl=5000)


@pytest.fixture
def cache(short_store, long_store, settings, clock):
    """Engine over counting in-memory stores and the fake clock."""
    return FijiCache(short_store, long_store, settings, clock=clock)


@pytest.fixture
def sqlite_store(tmp_path):
    """Create a temporary SQLiteTextStore instance."""
    store = SQLiteTextStore(tmp_path / "cache.db", table="blobs")
    yield store
    store.close()
