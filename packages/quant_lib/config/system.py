from pathlib import Path
from typing import List, Optional
from pydantic import Field
from .base import PROJECT_ROOT, EnvConfig, split_csv


class SystemConfig(EnvConfig):
    """
    Service-wide settings: identity, CORS, rate limiting and log sinks.
    """

    # Maps to SCREENER_ENV in .env
    environment: str = Field(validation_alias="SCREENER_ENV", default="production")

    debug: bool = Field(validation_alias="DEBUG", default=False)
    project_name: str = "Screener API"
    version: str = "1.0.0"

    # Comma-separated in .env; localhost is allowed for the dashboard dev server
    allowed_origins: str = Field(
        validation_alias="CORS_ORIGINS",
        default="http://localhost:3000,http://127.0.0.1:3000",
    )

    # slowapi switch (disabled in tests)
    rate_limit_enabled: bool = Field(validation_alias="RATE_LIMIT_ENABLED", default=True)

    # JSON log files; LOG_TO_FILE=false keeps logging on stderr only
    log_to_file: bool = Field(validation_alias="LOG_TO_FILE", default=True)
    log_dir: Path = Field(validation_alias="LOG_DIR", default=PROJECT_ROOT / "logs")

    @property
    def allowed_origins_list(self) -> List[str]:
        return split_csv(self.allowed_origins)

    @property
    def log_path(self) -> Optional[Path]:
        return self.log_dir if self.log_to_file else None
