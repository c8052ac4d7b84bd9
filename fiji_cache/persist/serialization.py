"""
JSON codec for namespace blobs.

A blob is a JSON object mapping entry keys to entry records. Decoding never
raises: a missing, malformed or non-object blob decodes to an empty mapping.
"""

import json
from typing import Optional

from ..errors import CacheDiagnostic
from ..telemetry import get_logger

logger = get_logger(__name__)


def encode(mapping: dict) -> str:
    """
    Serialize a namespace mapping.

    Raises:
        TypeError, ValueError: If a value is not JSON-serializable
    """
    return json.dumps(mapping, ensure_ascii=False, separators=(",", ":"))


def decode(blob: Optional[str]) -> dict:
    """
    Deserialize a namespace blob.

    Returns:
        Mapping of key -> raw record; empty if blob is absent or corrupt
    """
    if not blob:
        return {}

    try:
        data = json.loads(blob)
    except (json.JSONDecodeError, TypeError, ValueError):
        logger.warning("corrupt_blob", diagnostic=CacheDiagnostic.CORRUPT_BLOB.value, type=type(blob).__name__)
        return {}

    if not isinstance(data, dict):
        logger.warning(
            "corrupt_blob",
            diagnostic=CacheDiagnostic.CORRUPT_BLOB.value,
            type=type(data).__name__,
        )
        return {}

    return data
