# packages/quant_lib/config/base.py

from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

# File: /<root>/packages/quant_lib/config/base.py -> Root: /<root>
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def split_csv(raw: str) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']. Used for list-valued env vars."""
    return [item.strip() for item in raw.split(",") if item.strip()]


class EnvConfig(BaseSettings):
    """
    Every config group reads the same .env at the project root.
    Groups with a common prefix set env_prefix; the rest name each
    variable through validation_alias.
    """

    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
