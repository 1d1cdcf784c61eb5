# packages/quant_lib/config/__init__.py

from pydantic_settings import BaseSettings

from .base import PROJECT_ROOT, split_csv
from .cache import CacheConfig
from .database import DatabaseConfig
from .screener import ScreenerConfig
from .system import SystemConfig


class Settings(BaseSettings):
    """
    settings.db        -> Postgres (universe table, saved screens)
    settings.screener  -> query limits, universe TTL, rate limits, auth headers
    settings.cache     -> optional Redis query cache
    settings.system    -> environment, CORS, service metadata
    """

    db: DatabaseConfig = DatabaseConfig()
    screener: ScreenerConfig = ScreenerConfig()
    cache: CacheConfig = CacheConfig()
    system: SystemConfig = SystemConfig()


# Loaded once at import; a bad .env stops the process here
try:
    settings = Settings()
except Exception as e:
    print(f"CRITICAL: Config load failed. Details: {e}")
    raise e

__all__ = ["PROJECT_ROOT", "Settings", "settings", "split_csv"]
