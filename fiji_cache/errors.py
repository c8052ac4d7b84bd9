"""
Diagnostic taxonomy for the cache engine.

None of these conditions is raised to callers of the public operations.
They are reported as the ``diagnostic`` field of warning log events and the
operation degrades to a no-op, an absent entry, or an empty blob.
"""

from enum import Enum


class CacheDiagnostic(str, Enum):
    """Kinds of silently-handled cache faults."""
    
    INVALID_KEY = "invalid_key"                    # empty or missing key
    INVALID_RETENTION = "invalid_retention"        # unknown retention class argument
    MALFORMED_ENTRY = "malformed_entry"            # record failed validation
    CORRUPT_BLOB = "corrupt_blob"                  # namespace blob not a JSON object
    UNSERIALIZABLE_VALUE = "unserializable_value"  # value not JSON-encodable
