"""Logging setup for the project finance tracker.

Console output by default; an optional rotating log file; plain text or
JSON lines. JSON records carry the LogContext fields (project_id,
operation, correlation_id) as top-level keys.
"""

import json
import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from project_finance.utils.logging_utils import ContextFieldFilter

if TYPE_CHECKING:
    from project_finance.config.settings import FinanceTrackerConfig

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
FORMATS = ("text", "json")
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Chatty client libraries stay at WARNING even when we log DEBUG
QUIET_LOGGERS = ("googleapiclient", "google.auth", "urllib3")

# Attributes present on every LogRecord; anything else is a context field
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.lineno}",
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        # Decimal amounts and datetimes are written as strings
        return json.dumps(payload, default=str)


@dataclass
class LoggingConfig:
    """
    Where and how to log.

    Attributes:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL
        log_format: "text" or "json"
        log_file: Rotating log file; no file output when None
        console: Log to stderr
        max_file_size: Bytes before the log file rotates
        backup_count: Rotated files to keep
    """

    log_level: str = "INFO"
    log_format: str = "text"
    log_file: Optional[str] = None
    console: bool = True
    max_file_size: int = 5 * 1024 * 1024
    backup_count: int = 3

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(
                f"Invalid log level: {self.log_level}. Must be one of {LEVELS}"
            )
        if self.log_format not in FORMATS:
            raise ValueError(
                f"Invalid log format: {self.log_format}. Must be one of {FORMATS}"
            )

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """
        Read LOG_LEVEL, LOG_FORMAT, LOG_FILE, LOG_CONSOLE, LOG_MAX_FILE_SIZE
        and LOG_BACKUP_COUNT from the environment.
        """
        defaults = cls()
        return cls(
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            log_format=os.getenv("LOG_FORMAT", defaults.log_format).lower(),
            log_file=os.getenv("LOG_FILE") or None,
            console=os.getenv("LOG_CONSOLE", "true").lower() != "false",
            max_file_size=int(
                os.getenv("LOG_MAX_FILE_SIZE", str(defaults.max_file_size))
            ),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", str(defaults.backup_count))),
        )

    @classmethod
    def from_settings(cls, settings: "FinanceTrackerConfig") -> "LoggingConfig":
        """
        Level from the loaded settings (DEBUG=true forces DEBUG); output
        options from the environment, which load_config has already
        populated from .env.
        """
        config = cls.from_env()
        config.log_level = "DEBUG" if settings.debug else settings.log_level
        return config


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config."""
    reset_logging()
    root = logging.getLogger()
    level = getattr(logging, config.log_level)
    root.setLevel(level)

    if config.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = []
    if config.console:
        handlers.append(logging.StreamHandler())
    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                config.log_file,
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    context_filter = ContextFieldFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def reset_logging() -> None:
    """Remove and close the root logger's handlers; level back to WARNING."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.WARNING)
