from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict
from .base import EnvConfig


class ScreenerConfig(EnvConfig):
    # Pagination contract. Requests above max_limit are rejected, never clamped.
    max_limit: int = Field(default=500, gt=0)
    default_limit: int = Field(default=100, gt=0)

    # Universe snapshot
    universe_ttl_seconds: int = Field(default=300, ge=0)
    seed_when_empty: bool = True
    stale_after_minutes: int = 60

    # slowapi limit strings
    query_rate_limit: str = "120/minute"
    admin_rate_limit: str = "10/minute"

    # Caller identity is resolved upstream (auth gateway) and forwarded in a header
    user_header: str = "X-User-Id"

    # Shared secret for the scheduled cache refresh
    cron_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("CRON_SECRET", "SCREENER_CRON_SECRET"),
    )

    model_config = SettingsConfigDict(
        env_prefix="SCREENER_",  # SCREENER_MAX_LIMIT, SCREENER_UNIVERSE_TTL_SECONDS, ...
        case_sensitive=False,
        extra="ignore",
    )
