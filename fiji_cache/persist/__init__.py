"""
Persistence layer for the cache engine.

Provides:
- TextStore contract for blob backends
- In-memory and SQLite-backed stores
- JSON codec for namespace blobs
- BackendBridge for entry-level read/merge/write cycles
"""

from .base import TextStore
from .memory_store import InMemoryTextStore
from .sqlite_store import SQLiteTextStore
from .serialization import encode, decode
from .bridge import BackendBridge

__all__ = [
    "TextStore",
    "InMemoryTextStore",
    "SQLiteTextStore",
    "encode",
    "decode",
    "BackendBridge",
]
