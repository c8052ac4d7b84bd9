"""
Cache entry model and expiry policy.

An Entry is the unit of caching: a key, its payload, an absolute expiry
timestamp (milliseconds since the epoch) and the retention class that decides
which backend persists it. Anything that does not validate as an Entry is
treated as absent.
"""

import time
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CacheDiagnostic
from .telemetry import get_logger

logger = get_logger(__name__)


class RetentionClass(str, Enum):
    """Which backend persists an entry."""

    SHORT = "short"
    LONG = "long"


class Entry(BaseModel):
    """A single cached key/value/expiry/retention record."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Key, unique within a namespace")
    value: Any = Field(..., description="Payload; None is the empty sentinel")
    expires: int = Field(..., description="Epoch milliseconds after which the entry is stale")
    retention_class: RetentionClass = Field(..., description="Backend selector")

    def to_record(self) -> dict:
        """Convert to a JSON-compatible dict for the namespace blob."""
        return {
            "id": self.id,
            "value": self.value,
            "expires": self.expires,
            "retention_class": self.retention_class.value,
        }


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def compute_expiry(ttl: int, now: Optional[int] = None) -> int:
    """
    Compute an absolute expiry timestamp.

    Args:
        ttl: Time to live in milliseconds
        now: Reference time in epoch milliseconds (default: current time)

    Returns:
        now + ttl
    """
    if now is None:
        now = now_ms()
    return now + ttl


def is_stale(entry: Entry, now: Optional[int] = None) -> bool:
    """Whether the entry's expiry has passed."""
    if now is None:
        now = now_ms()
    return entry.expires < now


def create_entry(
    key: str,
    value: Any = None,
    retention_class: RetentionClass = RetentionClass.SHORT,
    ttl: int = 0,
    now: Optional[int] = None,
) -> Entry:
    """
    Build a well-formed entry.

    Args:
        key: Entry key
        value: Payload (default None)
        retention_class: Backend selector (default SHORT)
        ttl: TTL matching ``retention_class``, in milliseconds
        now: Reference time in epoch milliseconds

    Returns:
        New Entry expiring at now + ttl
    """
    return Entry(
        id=key,
        value=value,
        expires=compute_expiry(ttl, now),
        retention_class=retention_class,
    )


def coerce_retention(value: Any) -> Optional[RetentionClass]:
    """
    Normalize a retention class argument.

    Accepts RetentionClass members, their string values, a bool (True
    meaning long-lived) or None (short-lived). Anything else is logged and
    yields None.
    """
    if value is None:
        return RetentionClass.SHORT
    if isinstance(value, bool):
        return RetentionClass.LONG if value else RetentionClass.SHORT
    try:
        return RetentionClass(value)
    except ValueError:
        logger.warning(
            "invalid_retention_class",
            diagnostic=CacheDiagnostic.INVALID_RETENTION.value,
            retention_class=repr(value),
        )
        return None


def parse_entry(candidate: Any) -> Optional[Entry]:
    """
    Validate a candidate record.

    Entry instances pass through unchanged; dicts are validated. Every field
    must be present (``value`` may be None).

    Returns:
        Entry if well-formed, None otherwise
    """
    if isinstance(candidate, Entry):
        return candidate
    if not isinstance(candidate, dict):
        logger.warning(
            "malformed_entry",
            diagnostic=CacheDiagnostic.MALFORMED_ENTRY.value,
            type=type(candidate).__name__,
        )
        return None

    try:
        return Entry.model_validate(candidate)
    except ValidationError as e:
        logger.warning(
            "malformed_entry",
            diagnostic=CacheDiagnostic.MALFORMED_ENTRY.value,
            entry_id=candidate.get("id"),
            errors=e.error_count(),
        )
        return None


def is_well_formed(candidate: Any) -> bool:
    """Structural validity check for a candidate record."""
    return parse_entry(candidate) is not None
