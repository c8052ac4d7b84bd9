"""
Backend bridge: entry-level operations over whole-namespace blobs.

Each backend keeps a single blob under the namespace name. Saving or deleting
an entry reads that blob, merges the change and writes the whole blob back in
one call. There is no lock around the read-merge-write sequence: if another
writer updates the same blob in between, the later write wins and the other
change is lost. The engine assumes a single writer per namespace.
"""

from typing import Optional

from ..entry import Entry, RetentionClass, parse_entry
from ..errors import CacheDiagnostic
from ..telemetry import get_logger
from .base import TextStore
from .serialization import decode, encode

logger = get_logger(__name__)


class BackendBridge:
    """Translates Entry reads/writes into blob read/merge/write cycles."""

    def __init__(self, short_store: TextStore, long_store: TextStore, namespace: str):
        """
        Args:
            short_store: Backend for RetentionClass.SHORT entries
            long_store: Backend for RetentionClass.LONG entries
            namespace: Blob key used in both backends
        """
        self.short_store = short_store
        self.long_store = long_store
        self.namespace = namespace

    def store_for(self, retention_class: RetentionClass) -> TextStore:
        """Select the backend for a retention class."""
        if retention_class is RetentionClass.SHORT:
            return self.short_store
        if retention_class is RetentionClass.LONG:
            return self.long_store
        raise ValueError(f"Unknown retention class: {retention_class!r}")

    def _read_blob(self, store: TextStore) -> dict:
        return decode(store.read(self.namespace))

    def load_entry(self, key: str, retention_class: RetentionClass) -> Optional[Entry]:
        """
        Load one entry from the backend of ``retention_class``.

        Returns:
            Entry if the blob holds a well-formed record for ``key``, else None
        """
        retention_class = RetentionClass(retention_class)
        blob = self._read_blob(self.store_for(retention_class))
        raw = blob.get(key)
        logger.debug("backend_read", key=key, retention=retention_class.value, found=raw is not None)

        if raw is None:
            return None

        entry = parse_entry(raw)
        if entry is None:
            return None

        # A record must sit under its own id, in its own class's backend.
        if entry.id != key or entry.retention_class is not retention_class:
            logger.warning(
                "malformed_entry",
                diagnostic=CacheDiagnostic.MALFORMED_ENTRY.value,
                key=key,
                entry_id=entry.id,
                backend=retention_class.value,
                retention=entry.retention_class.value,
            )
            return None
        return entry

    def save_entry(self, entry: Entry) -> None:
        """Merge ``entry`` into its backend's blob and write the blob back."""
        if not isinstance(entry, Entry):
            logger.warning(
                "entry_not_saved",
                diagnostic=CacheDiagnostic.MALFORMED_ENTRY.value,
                type=type(entry).__name__,
            )
            return

        store = self.store_for(entry.retention_class)
        blob = self._read_blob(store)
        blob[entry.id] = entry.to_record()

        try:
            data = encode(blob)
        except (TypeError, ValueError) as e:
            logger.warning(
                "entry_not_saved",
                diagnostic=CacheDiagnostic.UNSERIALIZABLE_VALUE.value,
                key=entry.id,
                error=str(e),
            )
            return

        store.write(self.namespace, data)
        logger.debug("backend_write", key=entry.id, retention=entry.retention_class.value, size=len(blob))

    def delete_entry(self, key: str, retention_class: RetentionClass) -> None:
        """Remove ``key`` from the backend's blob; no write if it is absent."""
        retention_class = RetentionClass(retention_class)
        store = self.store_for(retention_class)
        blob = self._read_blob(store)

        if key not in blob:
            return

        del blob[key]
        store.write(self.namespace, encode(blob))
        logger.debug("backend_delete", key=key, retention=retention_class.value)

    def wipe(self) -> None:
        """Remove the namespace blob from both backends."""
        self.short_store.clear(self.namespace)
        self.long_store.clear(self.namespace)
        logger.info("namespace_wiped", namespace=self.namespace)

    def snapshot(self, retention_class: RetentionClass) -> dict[str, Entry]:
        """All well-formed entries currently persisted in one backend."""
        retention_class = RetentionClass(retention_class)
        blob = self._read_blob(self.store_for(retention_class))
        entries = {}
        for key, raw in blob.items():
            entry = parse_entry(raw)
            if entry is not None and entry.id == key and entry.retention_class is retention_class:
                entries[key] = entry
        return entries
