"""
Unit tests for the TextStore backends.

Tests in-memory and SQLite stores against the read/write/clear contract.
"""
import pytest

from fiji_cache.persist.memory_store import InMemoryTextStore
from fiji_cache.persist.sqlite_store import SQLiteTextStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    """Each contract test runs against both backends."""
    if request.param == "memory":
        yield InMemoryTextStore()
    else:
        s = SQLiteTextStore(tmp_path / "contract.db", table="blobs")
        yield s
        s.close()


def test_read_missing_is_none(store):
    assert store.read("ns") is None


def test_write_read_clear_roundtrip(store):
    store.write("ns", '{"a": 1}')
    assert store.read("ns") == '{"a": 1}'

    store.write("ns", '{"b": 2}')
    assert store.read("ns") == '{"b": 2}'

    store.clear("ns")
    assert store.read("ns") is None


def test_clear_missing_is_noop(store):
    store.clear("never-written")
    assert store.read("never-written") is None


def test_keys_are_independent(store):
    store.write("one", "1")
    store.write("two", "2")
    store.clear("one")

    assert store.read("one") is None
    assert store.read("two") == "2"


def test_sqlite_persistence_after_reopen(tmp_path):
    """Blobs should persist after closing and reopening the store."""
    db_path = tmp_path / "persist_test.db"

    with SQLiteTextStore(db_path, table="long_lived") as store1:
        store1.write("Fiji", '{"k": 1}')

    with SQLiteTextStore(db_path, table="long_lived") as store2:
        assert store2.read("Fiji") == '{"k": 1}'


def test_sqlite_tables_are_isolated(tmp_path):
    """Two stores on one file but different tables should not share blobs."""
    db_path = tmp_path / "shared.db"
    short = SQLiteTextStore(db_path, table="short_lived")
    long = SQLiteTextStore(db_path, table="long_lived")

    short.write("Fiji", "short-blob")
    long.write("Fiji", "long-blob")

    assert short.read("Fiji") == "short-blob"
    assert long.read("Fiji") == "long-blob"

    short.clear("Fiji")
    assert long.read("Fiji") == "long-blob"

    short.close()
    long.close()


def test_sqlite_rejects_bad_table_name(tmp_path):
    with pytest.raises(ValueError):
        SQLiteTextStore(tmp_path / "x.db", table="blobs; DROP TABLE x")


def test_sqlite_stats_and_keys(sqlite_store):
    assert sqlite_store.stats()["count"] == 0

    sqlite_store.write("b", "xx")
    sqlite_store.write("a", "yyy")

    stats = sqlite_store.stats()
    assert stats["count"] == 2
    assert stats["total_bytes"] == 5
    assert stats["newest_ts"] >= stats["oldest_ts"] > 0
    assert sqlite_store.keys() == ["a", "b"]


def test_sqlite_vacuum_keeps_data(sqlite_store):
    sqlite_store.write("a", "1")
    sqlite_store.clear("a")
    sqlite_store.write("b", "2")

    sqlite_store.vacuum()
    assert sqlite_store.read("b") == "2"

