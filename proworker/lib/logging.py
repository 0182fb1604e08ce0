"""
JSON logging for the assistant service.

Every record carries the request's correlation id (bound by
CorrelationIdMiddleware) and any fields passed through ``extra=`` or
log_with_context(), so a chat request can be followed from the HTTP layer
down to the LLM call by worker_id and correlation_id.
"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from contextvars import ContextVar

from proworker.lib.settings import settings


correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

# Attributes every LogRecord has; anything else arrived through extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName", "extra_fields"}

QUIET_LOGGERS = ("httpx", "httpcore", "openai", "sqlalchemy.engine", "uvicorn.access")


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields = {
        key: value for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }
    fields.update(getattr(record, "extra_fields", None) or {})
    return fields


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line: timestamp, level, logger, message,
    correlation_id when inside a request, then the record's extra fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = correlation_id_var.get()
        if correlation_id:
            entry["correlation_id"] = correlation_id

        for key, value in _extra_fields(record).items():
            entry.setdefault(key, value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """
    Route all logging to stdout.

    Args:
        level: Root log level name; unknown names fall back to INFO
        json_format: JSONFormatter when True, plain text for local debugging otherwise
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(
        JSONFormatter() if json_format
        else logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s')
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_correlation_id(correlation_id: Optional[str]) -> None:
    """Bind the correlation id for the current request context."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Current correlation id, or None outside a request."""
    return correlation_id_var.get()


def log_with_context(logger: logging.Logger, level: str, message: str, **fields: Any) -> None:
    """
    Log with structured fields; they appear as top-level JSON keys.

    Example:
        log_with_context(logger, "info", "Chat response sent", worker_id=7, cached=False)
    """
    getattr(logger, level.lower())(message, extra={"extra_fields": fields})


setup_logging(
    level="DEBUG" if settings.debug else "INFO",
    json_format=True
)
