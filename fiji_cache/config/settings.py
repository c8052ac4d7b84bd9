"""Cache engine settings and configuration schema."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


DEFAULT_TTL = 1000 * 60 * 60 * 24       # a day, in milliseconds
DEFAULT_LONG_TTL = DEFAULT_TTL * 30     # a month
DEFAULT_NAMESPACE = "Fiji"


class CacheSettings(BaseModel):
    """
    Options recognized by the cache engine.
    
    Accepts field names or the camelCase option names
    (``ns``, ``shortTtl``/``ttl``, ``longTtl``, ...).
    """
    
    model_config = ConfigDict(populate_by_name=True, frozen=True)
    
    namespace: str = Field(
        DEFAULT_NAMESPACE,
        min_length=1,
        validation_alias=AliasChoices("namespace", "ns"),
        description="Key under which both backends store their blob",
    )
    short_ttl: int = Field(
        DEFAULT_TTL,
        gt=0,
        validation_alias=AliasChoices("short_ttl", "shortTtl", "ttl"),
        description="Milliseconds added to now for short-retention entries",
    )
    long_ttl: int = Field(
        DEFAULT_LONG_TTL,
        gt=0,
        validation_alias=AliasChoices("long_ttl", "longTtl"),
        description="Milliseconds added to now for long-retention entries",
    )
    probe_long_on_miss: bool = Field(
        False,
        validation_alias=AliasChoices("probe_long_on_miss", "probeLongOnMiss"),
        description="Consult the long backend when the short one misses",
    )
    purge_on_init: bool = Field(
        False,
        validation_alias=AliasChoices("purge_on_init", "purgeOnInit"),
        description="Wipe the namespace in both backends at construction",
    )
