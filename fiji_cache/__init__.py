"""
Write-through TTL cache over short-lived and long-lived key-value storage.

Provides:
- FijiCache engine with get/set/delete/list
- Entry model and expiry policy
- In-memory and SQLite text stores
- Settings, diagnostics and structured logging
"""

from .config.settings import CacheSettings
from .entry import Entry, RetentionClass, create_entry, parse_entry, is_well_formed, compute_expiry, is_stale
from .errors import CacheDiagnostic
from .index import MemoryIndex
from .persist import TextStore, InMemoryTextStore, SQLiteTextStore, BackendBridge
from .engine import FijiCache, open_sqlite_cache

__version__ = "0.1.0"

__all__ = [
    "CacheSettings",
    "Entry",
    "RetentionClass",
    "create_entry",
    "parse_entry",
    "is_well_formed",
    "compute_expiry",
    "is_stale",
    "CacheDiagnostic",
    "MemoryIndex",
    "TextStore",
    "InMemoryTextStore",
    "SQLiteTextStore",
    "BackendBridge",
    "FijiCache",
    "open_sqlite_cache",
]
