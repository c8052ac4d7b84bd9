"""
Dict-backed text store.

Lives as long as the process; the default backend for both retention classes
and the usual backend in tests.
"""

from typing import Optional

from .base import TextStore


class InMemoryTextStore(TextStore):
    """Process-local TextStore."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._blobs: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def write(self, key: str, blob: str) -> None:
        self._blobs[key] = blob

    def clear(self, key: str) -> None:
        self._blobs.pop(key, None)

    def __len__(self) -> int:
        return len(self._blobs)
