"""
cafehub/core/logging.py

Purpose: Logging configuration

- Standardizes log format
- JSON logs in production, colored logs in development
- Context tracking (user_id, resource)
"""

import logging
import sys
import json
from contextvars import ContextVar
from datetime import datetime, timezone
from cafehub.core.config import settings

CONTEXT_FIELDS = ("user_id", "resource", "firebase_uid", "method", "path")

_log_context: ContextVar[dict] = ContextVar("cafehub_log_context", default={})


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for production. One object per line.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable formatter for development environment.
    """

    def format(self, record: logging.LogRecord) -> str:
        colors = {
            "DEBUG": "\033[36m",      # Cyan
            "INFO": "\033[32m",       # Green
            "WARNING": "\033[33m",    # Yellow
            "ERROR": "\033[31m",      # Red
            "CRITICAL": "\033[35m",   # Magenta
        }
        reset = "\033[0m"

        color = colors.get(record.levelname, reset)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        message = f"{color}[{timestamp}] {record.levelname:<8}{reset} {record.name}: {record.getMessage()}"

        context_parts = [
            f"{field}={getattr(record, field)}"
            for field in ("user_id", "resource")
            if hasattr(record, field)
        ]
        if context_parts:
            message += f" [{', '.join(context_parts)}]"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging():
    """
    Configures application-wide logging with appropriate formatters.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())
    if settings.is_production:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # Third-party noise
    for noisy in ("motor", "pymongo", "uvicorn.access", "google", "urllib3", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger("cafehub")
    logger.debug(
        "Logging configured",
        extra={"environment": settings.ENVIRONMENT, "log_level": settings.LOG_LEVEL}
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger namespaced under ``cafehub``.

    Args:
        name: Logger name (usually __name__)
    """
    if name.startswith("cafehub"):
        return logging.getLogger(name)
    return logging.getLogger(f"cafehub.{name}")


class ContextFilter(logging.Filter):
    """
    Copies the active LogContext fields onto each record.
    Explicit ``extra`` values on the record win.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class LogContext:
    """
    Context manager for adding structured context to logs.

    Scoped to the current task, so concurrent requests keep their own fields.

    Usage:
        with LogContext(user_id="64f0..."):
            logger.info("Deleting user")
    """

    def __init__(self, **kwargs):
        self.context = kwargs
        self._token = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self._token)
