"""
Write-through TTL cache engine.

Keeps a hot in-memory mirror of entries persisted in two key-value backends
(short-lived and long-lived storage). Reads are served from memory while the
entry is fresh; stale entries are refreshed from their backend and written
back. Every mutation goes to both the index and the backend selected by the
entry's retention class, and a key lives in at most one backend.

None of the public operations raise for invalid keys, malformed records or
corrupt blobs; those degrade to no-ops or absent values and are logged.
"""

from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

from .config.settings import CacheSettings
from .entry import (
    Entry,
    RetentionClass,
    coerce_retention,
    compute_expiry,
    create_entry,
    is_stale,
    now_ms,
)
from .errors import CacheDiagnostic
from .index import MemoryIndex
from .persist.base import TextStore
from .persist.bridge import BackendBridge
from .persist.memory_store import InMemoryTextStore
from .persist.sqlite_store import SQLiteTextStore
from .telemetry import get_logger

logger = get_logger(__name__)

SHORT_TABLE = "short_lived"
LONG_TABLE = "long_lived"


def _valid_key(key) -> bool:
    return isinstance(key, str) and bool(key)


class FijiCache:
    """
    Cache engine over a short-lived and a long-lived text store.

    Example:
        >>> cache = FijiCache(shortTtl=1000, longTtl=5000)
        >>> cache.set("user", {"name": "Ada"}, RetentionClass.LONG)
        >>> cache.get("user")
        {'name': 'Ada'}
    """

    def __init__(
        self,
        short_store: Optional[TextStore] = None,
        long_store: Optional[TextStore] = None,
        settings: Union[CacheSettings, Mapping[str, Any], None] = None,
        *,
        clock: Callable[[], int] = now_ms,
        **options: Any,
    ):
        """
        Initialize the engine.

        Args:
            short_store: Backend for short-retention entries (default: in-memory)
            long_store: Backend for long-retention entries (default: in-memory)
            settings: CacheSettings or a mapping of options
            clock: Returns the current time in epoch milliseconds
            **options: Settings given as keywords (only without ``settings``)
        """
        if settings is not None and options:
            raise TypeError("Pass either settings or keyword options, not both")

        if isinstance(settings, CacheSettings):
            self.settings = settings
        else:
            self.settings = CacheSettings.model_validate(dict(settings or options))

        self._clock = clock
        self._index = MemoryIndex()
        self._bridge = BackendBridge(
            short_store if short_store is not None else InMemoryTextStore(),
            long_store if long_store is not None else InMemoryTextStore(),
            self.settings.namespace,
        )

        if self.settings.purge_on_init:
            self._bridge.wipe()

    @property
    def bridge(self) -> BackendBridge:
        return self._bridge

    def ttl_for(self, retention_class: RetentionClass) -> int:
        """TTL in milliseconds for a retention class."""
        if retention_class is RetentionClass.LONG:
            return self.settings.long_ttl
        return self.settings.short_ttl

    def _load_on_miss(self, key: str) -> Optional[Entry]:
        entry = self._bridge.load_entry(key, RetentionClass.SHORT)
        if entry is None and self.settings.probe_long_on_miss:
            entry = self._bridge.load_entry(key, RetentionClass.LONG)
        return entry

    def get(self, key: str) -> Any:
        """
        Return the value cached under ``key``.

        - Not indexed: prime from the short backend, or index a new
          None-valued entry (not persisted).
        - Stale: refresh the value from the entry's backend, push the expiry
          forward and write the entry back.
        - Fresh: served from memory without touching a backend.

        Returns:
            The entry value, or None for an empty key
        """
        if not _valid_key(key):
            logger.warning("invalid_key", diagnostic=CacheDiagnostic.INVALID_KEY.value, op="get")
            return None

        now = self._clock()
        entry = self._index.get(key)

        if entry is None:
            entry = self._load_on_miss(key)
            if entry is None:
                entry = create_entry(key, None, RetentionClass.SHORT, self.settings.short_ttl, now)
                logger.debug("cache_miss", key=key, source="synthesized")
            else:
                logger.debug("cache_miss", key=key, source=entry.retention_class.value)
            self._index.put(entry)

        elif is_stale(entry, now):
            stored = self._bridge.load_entry(key, entry.retention_class)
            if stored is not None:
                entry.value = stored.value
            entry.expires = compute_expiry(self.ttl_for(entry.retention_class), now)
            self._bridge.save_entry(entry)
            self._index.put(entry)
            logger.debug("cache_refresh", key=key, expires=entry.expires, from_backend=stored is not None)

        else:
            logger.debug("cache_hit", key=key, expires=entry.expires)

        return entry.value

    def set(
        self,
        key: str,
        value: Any,
        retention_class: Optional[RetentionClass] = RetentionClass.SHORT,
    ) -> None:
        """
        Cache ``value`` under ``key`` and persist it.

        The expiry is reset from the TTL of ``retention_class`` (None means
        SHORT). The key is removed from the other retention class's backend
        before being written to its own.
        """
        if not _valid_key(key):
            logger.warning("invalid_key", diagnostic=CacheDiagnostic.INVALID_KEY.value, op="set")
            return

        retention_class = coerce_retention(retention_class)
        if retention_class is None:
            return

        now = self._clock()
        entry = self._index.get(key)

        # Covers retention moves and records left by an earlier engine, which
        # may exist even for keys indexed by a synthesizing get.
        other = RetentionClass.LONG if retention_class is RetentionClass.SHORT else RetentionClass.SHORT
        self._bridge.delete_entry(key, other)

        if entry is None:
            entry = create_entry(key, value, retention_class, self.ttl_for(retention_class), now)
            logger.debug("cache_insert", key=key, retention=retention_class.value)
        else:
            if entry.retention_class is not retention_class:
                logger.debug(
                    "retention_move",
                    key=key,
                    old=entry.retention_class.value,
                    new=retention_class.value,
                )
                entry.retention_class = retention_class
            entry.value = value
            entry.expires = compute_expiry(self.ttl_for(retention_class), now)
            logger.debug("cache_update", key=key, retention=retention_class.value)

        self._bridge.save_entry(entry)
        self._index.put(entry)

    def delete(self, key: Optional[str], wipe_all: bool = False) -> None:
        """
        Remove ``key`` from its backend and from memory.

        With an empty key and ``wipe_all=True`` both backends lose the whole
        namespace and the index is reset. Unknown keys are ignored; the
        backend is only touched for keys present in the index.
        """
        if not _valid_key(key):
            if wipe_all and not key:
                self._bridge.wipe()
                self._index.reset()
            else:
                logger.warning("invalid_key", diagnostic=CacheDiagnostic.INVALID_KEY.value, op="delete")
            return

        entry = self._index.get(key)
        if entry is not None:
            self._bridge.delete_entry(key, entry.retention_class)
        self._index.remove(key)
        logger.debug("cache_delete", key=key, indexed=entry is not None)

    def close(self) -> None:
        """Close both backends."""
        self._bridge.short_store.close()
        self._bridge.long_store.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __contains__(self, key: str) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self._index)

    def list(self) -> dict[str, Any]:
        """
        Map every indexed key to ``get(key)``.

        Stale entries are refreshed as a side effect.
        """
        return {key: self.get(key) for key in self._index.keys()}


def open_sqlite_cache(
    db_path: Union[str, Path],
    settings: Union[CacheSettings, Mapping[str, Any], None] = None,
    **options: Any,
) -> FijiCache:
    """
    Build an engine persisting both retention classes in one SQLite file.

    Short entries go to table ``short_lived``, long entries to ``long_lived``.

    Args:
        db_path: Path to SQLite database file
        settings: CacheSettings or a mapping of options
        **options: Settings given as keywords (forwarded to FijiCache)
    """
    db_path = Path(db_path)
    return FijiCache(
        SQLiteTextStore(db_path, table=SHORT_TABLE),
        SQLiteTextStore(db_path, table=LONG_TABLE),
        settings,
        **options,
    )

