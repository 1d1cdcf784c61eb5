from pydantic import Field
from pydantic_settings import SettingsConfigDict
from .base import EnvConfig


class CacheConfig(EnvConfig):
    """
    Optional Redis layer in front of screener queries.
    Disabled by default; the service answers identically without it.
    """

    enabled: bool = False
    redis_url: str = "redis://localhost:6379/0"
    query_ttl_seconds: int = Field(default=300, gt=0)
    key_prefix: str = "screener"

    # Socket timeout for Redis calls, in seconds
    socket_timeout: float = 0.5

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",  # CACHE_ENABLED, CACHE_REDIS_URL, ...
        case_sensitive=False,
        extra="ignore",
    )
