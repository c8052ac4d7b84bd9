"""Cache engine configuration."""

from .settings import CacheSettings, DEFAULT_LONG_TTL, DEFAULT_NAMESPACE, DEFAULT_TTL

__all__ = ["CacheSettings", "DEFAULT_LONG_TTL", "DEFAULT_NAMESPACE", "DEFAULT_TTL"]
