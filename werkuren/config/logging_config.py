"""Centralized logging configuration for the werkuren calculator.

Log records go to stderr so they never mix with command output on stdout,
and optionally to a rotating file. The JSON format carries the fields set
through ``LogContext`` (for example the session state of a command).
"""

import json
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from werkuren.config.settings import WerkurenConfig

# Attributes every LogRecord carries; anything else was added via extra={}
# or a LogContext and belongs in the JSON payload.
_RECORD_ATTRIBUTES = set(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as a single JSON line.

        Values that JSON cannot represent (Decimal, datetime) are written
        as their string form.

        Args:
            record: Log record to format

        Returns:
            JSON string representation of log record
        """
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class LoggingConfig:
    """
    Configuration for centralized logging.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type ('standard' or 'json')
        log_file: Path to log file (optional)
        enable_console: Enable stderr output
        max_file_size: Maximum log file size in bytes (default: 1MB)
        backup_count: Number of backup files to keep (default: 3)
    """

    VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    VALID_FORMATS = {"standard", "json"}

    def __init__(
        self,
        log_level: str = "WARNING",
        log_format: str = "standard",
        log_file: Optional[str] = None,
        enable_console: bool = True,
        max_file_size: int = 1024 * 1024,  # 1MB
        backup_count: int = 3,
    ):
        """
        Initialize logging configuration.

        File logging is enabled by giving a ``log_file``.

        Raises:
            ValueError: If invalid log level or format
        """
        if log_level.upper() not in self.VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {log_level}. "
                f"Must be one of {', '.join(sorted(self.VALID_LEVELS))}"
            )

        if log_format not in self.VALID_FORMATS:
            raise ValueError(
                f"Invalid log format: {log_format}. "
                f"Must be one of {', '.join(sorted(self.VALID_FORMATS))}"
            )

        self.log_level = log_level.upper()
        self.log_format = log_format
        self.log_file = log_file
        self.enable_console = enable_console
        self.max_file_size = max_file_size
        self.backup_count = backup_count

    @property
    def enable_file(self) -> bool:
        return bool(self.log_file)

    @classmethod
    def from_settings(
        cls, settings: "WerkurenConfig", debug: bool = False
    ) -> "LoggingConfig":
        """
        Build logging configuration from application settings.

        The level comes from the settings (``LOG_LEVEL``); ``debug`` forces
        DEBUG. Format and file come from ``LOG_FORMAT`` and ``LOG_FILE``.

        Args:
            settings: Loaded application settings
            debug: Force DEBUG level (the CLI ``--debug`` flag)

        Returns:
            LoggingConfig instance
        """
        level = "DEBUG" if debug or settings.debug else settings.log_level
        return cls(
            log_level=level,
            log_format=settings.log_format,
            log_file=settings.log_file,
        )


def configure_logging(config: LoggingConfig) -> None:
    """
    Configure the root logger according to ``config``.

    Existing handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        config: LoggingConfig instance
    """
    from werkuren.utils.logging_utils import _ContextFilter

    root_logger = logging.getLogger()
    reset_logging()
    root_logger.setLevel(getattr(logging, config.log_level))

    if config.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers = []
    if config.enable_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if config.enable_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=str(log_path),
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    context_filter = _ContextFilter()
    for handler in handlers:
        handler.setLevel(getattr(logging, config.log_level))
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)


def reset_logging() -> None:
    """
    Remove all root handlers and restore the default WARNING level.

    Useful for testing and cleanup.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(logging.WARNING)
