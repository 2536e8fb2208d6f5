"""Structured logging for the archive API.

Provides context-aware logging with automatic request/article tagging.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime

# Context variables for automatic tagging
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_article_id: ContextVar[str | None] = ContextVar("article_id", default=None)

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def set_context(
    request_id: str | None = None,
    article_id: str | None = None,
) -> None:
    """Set logging context variables."""
    if request_id is not None:
        _request_id.set(request_id)
    if article_id is not None:
        _article_id.set(article_id)


def clear_context() -> None:
    """Clear all logging context variables."""
    _request_id.set(None)
    _article_id.set(None)


def get_request_id() -> str | None:
    return _request_id.get()


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add context from contextvars
        if request_id := _request_id.get():
            log_data["request_id"] = request_id
        if article_id := _article_id.get():
            log_data["article_id"] = article_id

        # Add extra fields
        if hasattr(record, "extra_data"):
            log_data["data"] = record.extra_data

        # Add exception info
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure the root logger from LOG_LEVEL and LOG_FORMAT.

    Args:
        level: Logging level name (default from LOG_LEVEL, then INFO)
        fmt: "text" or "json" (default from LOG_FORMAT, then text)
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    fmt = (fmt or os.getenv("LOG_FORMAT", "text")).lower()

    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        handlers=[handler],
        force=True,
    )
