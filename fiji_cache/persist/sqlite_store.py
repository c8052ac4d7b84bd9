"""
SQLite-backed text store.

One table per store instance; each row holds a namespace blob:
- key: namespace name
- value: serialized blob (TEXT)
- ts: last write time (unix seconds)

Two instances on the same database file with different tables give the
short-lived and long-lived backends.
"""

import re
import sqlite3
import time
from pathlib import Path
from typing import Optional

from .base import TextStore

_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SQLiteTextStore(TextStore):
    """
    File-backed SQLite TextStore.

    Uses WAL mode so a second connection (e.g. the CLI) can read while the
    engine writes.
    """

    def __init__(self, db_path: Path, table: str = "blobs"):
        """
        Initialize the store at the given path.

        Args:
            db_path: Path to SQLite database file
            table: Table holding this store's blobs
        """
        if not _TABLE_NAME.match(table):
            raise ValueError(f"Invalid table name: {table!r}")

        self.db_path = Path(db_path)
        self.table = table
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(
            str(self.db_path),
            check_same_thread=False,
            timeout=10.0,
        )

        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA synchronous=NORMAL")

        self._init_table()

    def _init_table(self) -> None:
        """Create the blob table if it doesn't exist."""
        self._conn.execute(f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                ts INTEGER NOT NULL
            )
        """)
        self._conn.commit()

    def read(self, key: str) -> Optional[str]:
        cursor = self._conn.execute(
            f"SELECT value FROM {self.table} WHERE key = ?",
            (key,)
        )
        row = cursor.fetchone()
        return row[0] if row else None

    def write(self, key: str, blob: str) -> None:
        self._conn.execute(
            f"INSERT OR REPLACE INTO {self.table} (key, value, ts) VALUES (?, ?, ?)",
            (key, blob, int(time.time()))
        )
        self._conn.commit()

    def clear(self, key: str) -> None:
        self._conn.execute(
            f"DELETE FROM {self.table} WHERE key = ?",
            (key,)
        )
        self._conn.commit()

    def keys(self) -> list[str]:
        """Names of all blobs in this table."""
        cursor = self._conn.execute(f"SELECT key FROM {self.table} ORDER BY key")
        return [row[0] for row in cursor.fetchall()]

    def stats(self) -> dict:
        """
        Get statistics for this store's table.

        Returns:
            Dict with count, total_bytes, oldest_ts, newest_ts
        """
        cursor = self._conn.execute(f"""
            SELECT
                COUNT(*) as count,
                SUM(LENGTH(value)) as total_bytes,
                MIN(ts) as oldest_ts,
                MAX(ts) as newest_ts
            FROM {self.table}
        """)
        row = cursor.fetchone()

        return {
            "count": row[0] or 0,
            "total_bytes": row[1] or 0,
            "oldest_ts": row[2] or 0,
            "newest_ts": row[3] or 0,
        }

    def vacuum(self) -> None:
        """Reclaim space after large deletions."""
        self._conn.execute("VACUUM")
        self._conn.commit()

    def close(self) -> None:
        """Close database connection."""
        self._conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
