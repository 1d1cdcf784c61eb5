from typing import Optional
from pydantic import Field, PostgresDsn, computed_field
from .base import EnvConfig


class DatabaseConfig(EnvConfig):
    """
    Postgres holding the screener_cache universe and saved_screens.
    DATABASE_URL, when set, wins over the POSTGRES_* parts.
    """

    user: str = Field(validation_alias="POSTGRES_USER", default="user")
    password: str = Field(validation_alias="POSTGRES_PASSWORD", default="password")
    host: str = Field(validation_alias="POSTGRES_HOST", default="localhost")
    port: int = Field(validation_alias="POSTGRES_PORT", default=5432)
    name: str = Field(validation_alias="POSTGRES_DB", default="screener_db")
    url_override: Optional[str] = Field(validation_alias="DATABASE_URL", default=None)

    # Pool sizing for the API process
    pool_size: int = Field(validation_alias="POSTGRES_POOL_SIZE", default=5, ge=1)
    max_overflow: int = Field(validation_alias="POSTGRES_MAX_OVERFLOW", default=10, ge=0)

    # Log every statement (local debugging only)
    echo: bool = Field(validation_alias="POSTGRES_ECHO", default=False)

    @computed_field
    @property
    def URL(self) -> str:
        """Async SQLAlchemy connection string (asyncpg driver)."""
        if self.url_override:
            return self.url_override
        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=self.user,
                password=self.password,
                host=self.host,
                port=self.port,
                path=self.name,
            )
        )

    @property
    def is_postgres(self) -> bool:
        return self.URL.startswith("postgresql")
