"""
Unit tests for fiji_cache/index.py
"""
from fiji_cache.entry import create_entry
from fiji_cache.index import MemoryIndex


def test_put_get_remove():
    index = MemoryIndex()
    entry = create_entry("a", 1, ttl=10, now=0)

    index.put(entry)
    assert index.get("a") is entry
    assert "a" in index

    index.remove("a")
    assert index.get("a") is None
    assert len(index) == 0


def test_get_empty_key_is_absent():
    assert MemoryIndex().get("") is None


def test_put_rejects_non_entries():
    """Only Entry instances should be indexed."""
    index = MemoryIndex()
    index.put({"id": "a", "value": 1, "expires": 1, "retention_class": "short"})
    index.put(None)

    assert index.keys() == []


def test_remove_unknown_key_is_noop():
    index = MemoryIndex()
    index.remove("missing")
    assert len(index) == 0


def test_reset_discards_everything():
    index = MemoryIndex()
    for key in ("a", "b", "c"):
        index.put(create_entry(key, key, ttl=10, now=0))

    assert sorted(index.keys()) == ["a", "b", "c"]

    index.reset()
    assert index.keys() == []
    assert index.get("a") is None
