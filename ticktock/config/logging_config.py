"""Root logger setup for the ticktock CLI and server.

Output goes to a single stream handler (stderr by default) in either a
human-readable line format or one JSON object per line. Fields bound with
``LogContext`` are attached to every record by the context filter.
"""

import json
import logging
import os
from typing import IO, Optional

from ticktock.utils.logging_utils import _ContextFilter

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
FORMATS = ("standard", "json")

STANDARD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
STANDARD_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else came from context or extra=
_BUILTIN_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# Chatty at DEBUG: request lines and multipart parsing
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "multipart")


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, STANDARD_DATEFMT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _BUILTIN_ATTRIBUTES and not key.startswith("_")
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class LoggingConfig:
    """
    Level and output format for the root logger.

    Attributes:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL
        log_format: 'standard' or 'json'
    """

    def __init__(self, log_level: str = "INFO", log_format: str = "standard"):
        """
        Raises:
            ValueError: If the level or format is unknown
        """
        log_level = log_level.upper()
        if log_level not in LEVELS:
            raise ValueError(
                f"Invalid log level: {log_level}. Must be one of {', '.join(LEVELS)}"
            )
        if log_format not in FORMATS:
            raise ValueError(
                f"Invalid log format: {log_format}. Must be one of {', '.join(FORMATS)}"
            )
        self.log_level = log_level
        self.log_format = log_format

    @classmethod
    def from_env(cls, default_level: str = "INFO") -> "LoggingConfig":
        """Read LOG_LEVEL and LOG_FORMAT, falling back to ``default_level``."""
        return cls(
            log_level=os.getenv("LOG_LEVEL", default_level),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )

    def build_formatter(self) -> logging.Formatter:
        if self.log_format == "json":
            return JSONFormatter()
        return logging.Formatter(fmt=STANDARD_FORMAT, datefmt=STANDARD_DATEFMT)


def _drop_root_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def configure_logging(config: LoggingConfig, stream: Optional[IO[str]] = None) -> None:
    """
    Install one handler on the root logger, replacing any existing ones.

    Args:
        config: Level and format to apply
        stream: Destination stream; stderr when omitted
    """
    root = logging.getLogger()
    _drop_root_handlers(root)

    level = logging.getLevelName(config.log_level)
    root.setLevel(level)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(config.build_formatter())
    handler.addFilter(_ContextFilter())
    root.addHandler(handler)

    if level == logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.INFO)


def reset_logging() -> None:
    """Remove root handlers and restore the WARNING level."""
    root = logging.getLogger()
    _drop_root_handlers(root)
    root.setLevel(logging.WARNING)
