"""
Unit tests for fiji_cache/entry.py

Tests entry construction, structural validation and the expiry policy.
"""
import pytest

from fiji_cache.entry import (
    Entry,
    RetentionClass,
    coerce_retention,
    compute_expiry,
    create_entry,
    is_stale,
    is_well_formed,
    parse_entry,
)


def test_create_entry_defaults_to_none_value():
    """Value should default to None and retention to SHORT."""
    entry = create_entry("k", ttl=1000, now=5000)

    assert entry.id == "k"
    assert entry.value is None
    assert entry.retention_class is RetentionClass.SHORT
    assert entry.expires == 6000


def test_create_entry_keeps_value_reference():
    """The cached value should be the same object that was passed in."""
    payload = {"nested": [1, 2, 3]}
    entry = create_entry("k", payload, RetentionClass.LONG, ttl=10, now=0)

    assert entry.value is payload
    assert entry.retention_class is RetentionClass.LONG


def test_compute_expiry_adds_ttl():
    assert compute_expiry(250, now=1000) == 1250


def test_compute_expiry_uses_current_time_by_default():
    """Without now, expiry should be in the future relative to the epoch clock."""
    from fiji_cache.entry import now_ms

    before = now_ms()
    expires = compute_expiry(60_000)
    assert expires >= before + 60_000


def test_is_stale_boundary():
    """An entry is stale only once expires is strictly before now."""
    entry = create_entry("k", 1, ttl=100, now=0)

    assert not is_stale(entry, now=50)
    assert not is_stale(entry, now=100)
    assert is_stale(entry, now=101)


def test_parse_entry_accepts_record():
    record = {"id": "a", "value": None, "expires": 123, "retention_class": "long"}

    entry = parse_entry(record)

    assert isinstance(entry, Entry)
    assert entry.value is None
    assert entry.retention_class is RetentionClass.LONG


def test_parse_entry_passes_entry_through():
    entry = create_entry("a", 1, ttl=1, now=0)
    assert parse_entry(entry) is entry


@pytest.mark.parametrize("candidate", [
    None,
    "not a record",
    42,
    {"id": "a", "expires": 1, "retention_class": "short"},           # no value
    {"id": "a", "value": 1, "retention_class": "short"},             # no expires
    {"id": "a", "value": 1, "expires": 1},                           # no retention
    {"value": 1, "expires": 1, "retention_class": "short"},          # no id
    {"id": "", "value": 1, "expires": 1, "retention_class": "short"},
    {"id": "a", "value": 1, "expires": "soon", "retention_class": "short"},
    {"id": "a", "value": 1, "expires": 1, "retention_class": "forever"},
])
def test_malformed_candidates_are_absent(candidate):
    """Partially-constructed or foreign objects should not validate."""
    assert parse_entry(candidate) is None
    assert is_well_formed(candidate) is False


def test_to_record_roundtrip():
    entry = create_entry("a", {"x": 1}, RetentionClass.LONG, ttl=5, now=10)

    record = entry.to_record()

    assert record == {"id": "a", "value": {"x": 1}, "expires": 15, "retention_class": "long"}
    assert parse_entry(record) == entry


@pytest.mark.parametrize("value,expected", [
    (RetentionClass.SHORT, RetentionClass.SHORT),
    ("long", RetentionClass.LONG),
    (True, RetentionClass.LONG),
    (False, RetentionClass.SHORT),
    ("medium", None),
    (None, RetentionClass.SHORT),
    ([], None),
])
def test_coerce_retention(value, expected):
    assert coerce_retention(value) is expected


def test_invalid_retention_reports_its_own_diagnostic(monkeypatch):
    """Bad retention arguments are flagged as such, not as malformed records."""
    import fiji_cache.entry as entry_module

    events = []

    class RecordingLogger:
        def warning(self, event, **kw):
            events.append((event, kw))

    monkeypatch.setattr(entry_module, "logger", RecordingLogger())

    assert coerce_retention("medium") is None
    assert events[0][1]["diagnostic"] == "invalid_retention"
