"""
Logging setup for the stabilometry CLI.

Analysis modules only create module loggers. The CLI installs a stderr
handler and, unless disabled in the ``[logging]`` table of the config file,
a rotating log file under ``~/.stabilometry/logs``.
"""

import logging
import logging.config
import sys

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from stabilometry.constants import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_MAX_BYTES,
)

logger = logging.getLogger(__name__)

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MEGABYTE = 1024 * 1024

_logging_configured = False


class LogFileSettings(BaseModel):
    """Settings read from the ``[logging]`` config table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    enabled: bool = True
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"
    max_size_mb: float = Field(default=DEFAULT_LOG_MAX_BYTES / MEGABYTE, gt=0)
    backup_count: int = Field(default=DEFAULT_LOG_BACKUP_COUNT, ge=0)

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @property
    def max_bytes(self) -> int:
        return int(self.max_size_mb * MEGABYTE)


def get_log_path() -> Path:
    """Path of the log file; the log directory is created if missing."""
    DEFAULT_LOG_DIR.mkdir(parents=True, exist_ok=True)
    return DEFAULT_LOG_DIR / DEFAULT_LOG_FILE


def load_log_file_settings() -> LogFileSettings:
    """
    Read file logging settings from the config file.

    Invalid values are reported and replaced by the defaults, so a bad
    ``[logging]`` table never stops the CLI from starting.
    """
    from stabilometry.config import load_config

    table = load_config().get("logging", {})
    if not isinstance(table, dict):
        table = {}

    try:
        return LogFileSettings.model_validate(table)
    except ValidationError as e:
        sys.stderr.write(f"WARNING: Ignoring invalid [logging] settings: {e}\n")
        return LogFileSettings()


def _build_logging_config(
    verbose: bool = False,
    console_format: str | None = None,
    file_logging: bool = True,
) -> dict[str, Any]:
    """
    Build the dictConfig dictionary for the CLI.

    Args:
        verbose: Show DEBUG messages on the console
        console_format: Console format string, defaults to the file format
        file_logging: Add the rotating file handler if enabled in config

    Returns:
        Dictionary for logging.config.dictConfig()
    """
    settings = load_log_file_settings()

    formatters = {"console": {"format": console_format or FILE_FORMAT}}
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG" if verbose else "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    }

    if file_logging and settings.enabled:
        formatters["file"] = {"format": FILE_FORMAT}
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.level,
            "formatter": "file",
            "filename": str(get_log_path()),
            "maxBytes": settings.max_bytes,
            "backupCount": settings.backup_count,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "root": {"level": "DEBUG", "handlers": list(handlers)},
    }


def setup_logging(*, verbose: bool = False, console_format: str | None = None) -> None:
    """
    Configure logging once per process; later calls do nothing.

    If the log file cannot be opened, logging continues on the console only.
    """
    global _logging_configured

    if _logging_configured:
        return

    try:
        logging.config.dictConfig(
            _build_logging_config(verbose=verbose, console_format=console_format)
        )
    except (OSError, ValueError) as e:
        logging.config.dictConfig(
            _build_logging_config(
                verbose=verbose, console_format=console_format, file_logging=False
            )
        )
        logger.warning(f"File logging disabled: {e}")

    _logging_configured = True
