"""
Key-value text store contract.

A store holds opaque string blobs under string keys. The engine uses two
instances, one for short-lived and one for long-lived storage, and keeps one
blob per namespace in each.
"""

from abc import ABC, abstractmethod
from typing import Optional


class TextStore(ABC):
    """Abstract interface for blob backends."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key``, or None."""
        ...

    @abstractmethod
    def write(self, key: str, blob: str) -> None:
        """Store ``blob`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def clear(self, key: str) -> None:
        """Remove the blob stored under ``key``; no-op if absent."""
        ...

    def close(self) -> None:
        """Release held resources. Stores without any need not override."""
