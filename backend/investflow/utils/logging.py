# backend/investflow/utils/logging.py
"""
Logging setup for the valuation engine and its HTTP surface.

setup_logging() installs one stdout handler on the root logger. Every
record passing through it is stamped with the current request's
correlation ID, so a history reconstruction that logs a warning about an
unknown asset can be matched to the request that caused it.

Two output formats, picked by LOG_FORMAT:
    text  2024-06-15 10:30:00 | WARNING  | 7f3c... | investflow.services... | ...
    json  {"timestamp": ..., "level": ..., "correlation_id": ..., ...}

Modules log through logging.getLogger(__name__) as usual.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from investflow.config import settings
from investflow.utils.context import get_correlation_id

# =============================================================================
# CONSTANTS
# =============================================================================

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NO_CORRELATION_ID = "no-correlation-id"

# Server-side libraries whose INFO output drowns the engine's own lines
NOISY_LOGGERS = ["uvicorn.access", "httpx", "httpcore", "multipart"]

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "correlation_id"}


# =============================================================================
# FILTER / FORMATTER
# =============================================================================

class CorrelationIdFilter(logging.Filter):
    """Adds ``correlation_id`` to each record (available as %(correlation_id)s)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line, for log aggregation in production.

    Fields passed with ``extra=`` land under an "extra" key; values that
    json cannot encode are stored as their str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", NO_CORRELATION_ID),
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        }
        if extra:
            entry["extra"] = extra

        return json.dumps(entry, default=str)


# =============================================================================
# SETUP
# =============================================================================

def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
) -> None:
    """
    Configure the root logger. Called once from main.py before the app exists.

    Args:
        level: Level name (default: settings.log_level)
        log_format: "text" or "json" (default: settings.log_format)

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = (level or settings.log_level).strip().upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: '{level_name}'. "
            f"Valid levels are: {', '.join(LOG_LEVELS)}"
        )
    format_type = (log_format or settings.log_format).lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(LOG_LEVELS[level_name])

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={level_name}, format={format_type}"
    )
