# packages/quant_lib/logging.py

import sys
from pathlib import Path
from typing import Optional
from loguru import logger as _logger  # Aliased to avoid conflict

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[app]}:{extra[context]}</cyan> | <level>{message}</level>"
)


class LogManager:
    """
    Owns the loguru sinks for one entrypoint (API server, refresh script).
    Library modules never add sinks; they call get_logger() below.
    """

    def __init__(
        self,
        service_name: str,
        debug: bool = False,
        log_dir: Optional[Path] = None,
    ):
        self.service_name = service_name
        self.level = "DEBUG" if debug else "INFO"
        self.log_dir = log_dir
        self._configure()

    def _configure(self):
        _logger.remove()
        # Records logged before a context is bound still need both keys
        _logger.configure(extra={"app": self.service_name, "context": "-"})

        _logger.add(sys.stderr, format=CONSOLE_FORMAT, level=self.level, colorize=True)

        if self.log_dir is None:
            return

        # One rotated JSON-lines file per service
        self.log_dir.mkdir(parents=True, exist_ok=True)
        _logger.add(
            self.log_dir / f"{self.service_name}.json.log",
            rotation="10 MB",
            retention="7 days",
            level=self.level,
            serialize=True,
            enqueue=True,
        )

    def get_logger(self, context_name: str):
        return _logger.bind(app=self.service_name, context=context_name)


def get_logger(context_name: str):
    """Bound logger for library code; sinks come from the entrypoint's LogManager."""
    return _logger.bind(context=context_name)
