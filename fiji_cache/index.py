"""
In-memory index: the fast path mapping keys to entries.
"""

from typing import Optional

from .entry import Entry
from .errors import CacheDiagnostic
from .telemetry import get_logger

logger = get_logger(__name__)


class MemoryIndex:
    """
    Process-local mapping from key to Entry.

    Owned exclusively by one engine instance. Only well-formed entries are
    ever stored, so lookups never surface partial records.
    """

    def __init__(self):
        self._entries: dict[str, Entry] = {}

    def get(self, key: str) -> Optional[Entry]:
        """Return the entry for ``key``, or None if missing or invalid key."""
        if not key:
            logger.warning("invalid_key", diagnostic=CacheDiagnostic.INVALID_KEY.value, op="index.get")
            return None
        return self._entries.get(key)

    def put(self, entry: Entry) -> None:
        """Store ``entry`` under its id; anything else is ignored."""
        if not isinstance(entry, Entry):
            logger.warning(
                "entry_not_indexed",
                diagnostic=CacheDiagnostic.MALFORMED_ENTRY.value,
                type=type(entry).__name__,
            )
            return
        self._entries[entry.id] = entry

    def remove(self, key: str) -> None:
        """Drop the mapping for ``key`` if present."""
        self._entries.pop(key, None)

    def reset(self) -> None:
        """Discard every entry."""
        self._entries = {}

    def keys(self) -> list[str]:
        """Snapshot of the indexed keys."""
        return list(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
