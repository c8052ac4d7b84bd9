"""
CLI utility for cache maintenance.

Usage:
    fiji-cache --stats
    fiji-cache --list --namespace MyApp
    fiji-cache --purge --db data/cache/fiji.db
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

from .engine import open_sqlite_cache
from .entry import RetentionClass, is_stale, now_ms
from .telemetry import setup_logging


def format_bytes(bytes_val: int) -> str:
    """Format bytes as human-readable string."""
    for unit in ["B", "KB", "MB", "GB"]:
        if bytes_val < 1024:
            return f"{bytes_val:.1f} {unit}"
        bytes_val /= 1024
    return f"{bytes_val:.1f} TB"


def format_expiry(expires_ms: int) -> str:
    """Format epoch milliseconds as human-readable string."""
    return datetime.fromtimestamp(expires_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def show_stats(db_path: Path, namespace: str) -> int:
    """
    Display entry counts per backend.

    Args:
        db_path: SQLite database file
        namespace: Namespace blob to inspect
    """
    if not db_path.exists():
        print(f"❌ Cache database not found: {db_path}")
        return 1

    print(f"📊 Cache Statistics: {db_path} (namespace {namespace!r})\n")

    now = now_ms()
    with open_sqlite_cache(db_path, namespace=namespace) as cache:
        print(f"{'Backend':<10} {'Entries':>10} {'Fresh':>10} {'Stale':>10} {'Size':>12}")
        print("=" * 56)

        for retention in RetentionClass:
            entries = cache.bridge.snapshot(retention)
            stale = sum(1 for entry in entries.values() if is_stale(entry, now))
            size = cache.bridge.store_for(retention).stats()["total_bytes"]
            print(
                f"{retention.value:<10} {len(entries):>10,} {len(entries) - stale:>10,} "
                f"{stale:>10,} {format_bytes(size):>12}"
            )
        print()

    return 0


def list_entries(db_path: Path, namespace: str) -> int:
    """
    Print every persisted entry with its retention class and expiry.

    Args:
        db_path: SQLite database file
        namespace: Namespace blob to inspect
    """
    if not db_path.exists():
        print(f"❌ Cache database not found: {db_path}")
        return 1

    with open_sqlite_cache(db_path, namespace=namespace) as cache:
        for retention in RetentionClass:
            for key, entry in sorted(cache.bridge.snapshot(retention).items()):
                value = json.dumps(entry.value, ensure_ascii=False)
                print(f"{key:<30} {retention.value:<6} {format_expiry(entry.expires):>20}  {value}")

    return 0


def purge_cache(db_path: Path, namespace: str) -> int:
    """
    Wipe the namespace from both backends and vacuum the database.

    Args:
        db_path: SQLite database file
        namespace: Namespace blob to remove
    """
    if not db_path.exists():
        print(f"❌ Cache database not found: {db_path}")
        return 1

    print(f"🗑️  Purging namespace {namespace!r}\n")

    with open_sqlite_cache(db_path, namespace=namespace) as cache:
        cache.delete(None, wipe_all=True)

        print("🔧 Vacuuming database...")
        for retention in RetentionClass:
            cache.bridge.store_for(retention).vacuum()
        print("   ✓ Done")

    print("\n✅ Cache purge complete")
    return 0


def main(argv=None):
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Inspect or purge a SQLite-backed Fiji cache"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show entry counts per backend",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List persisted entries",
    )
    parser.add_argument(
        "--purge",
        action="store_true",
        help="Remove the namespace from both backends",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=Path("data/cache/fiji.db"),
        help="Cache database (default: data/cache/fiji.db)",
    )
    parser.add_argument(
        "--namespace",
        type=str,
        default="Fiji",
        help="Namespace blob name (default: Fiji)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not (args.stats or args.list or args.purge):
        parser.print_help()
        print("\n❌ Error: Must specify --stats, --list or --purge")
        sys.exit(1)

    for enabled, action in (
        (args.stats, show_stats),
        (args.list, list_entries),
        (args.purge, purge_cache),
    ):
        if enabled:
            exit_code = action(args.db, args.namespace)
            if exit_code != 0:
                sys.exit(exit_code)

    sys.exit(0)


if __name__ == "__main__":
    main()
