"""
Centralized logging configuration for the page asset engine.

Provides structured logging with request context so that asset resolution
failures can be traced back to the page render that triggered them.

Nothing is configured on import. The web app calls ``setup_logging`` with
``Settings.logging`` at startup; until then records go through the standard
library's last-resort handler.
"""

from __future__ import annotations

import json
import logging
import logging.config
from collections.abc import Callable
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from types import TracebackType
from typing import Any, ParamSpec, TypeVar

from .config import LoggingConfig

P = ParamSpec("P")
R = TypeVar("R")

ROOT_LOGGER = "pageassets"
CONTEXT_FIELDS = ("request_id", "page_id", "operation", "mode")

# asyncio copies the current value into every task it creates
_log_context: ContextVar[dict[str, Any]] = ContextVar("pageassets_log_context", default={})


class StructuredFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None and exc_value is not None:
                log_entry["exception"] = {
                    "type": exc_type.__name__,
                    "message": str(exc_value),
                    "traceback": self.formatException((exc_type, exc_value, exc_tb)),
                }

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ContextFilter(logging.Filter):
    """Copies the current task's logging context onto each record."""

    @property
    def context(self) -> dict[str, Any]:
        return dict(_log_context.get())

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            setattr(record, key, value)
        return True


context_filter = ContextFilter()


def setup_logging(config: LoggingConfig) -> None:
    """
    Set up centralized logging configuration.

    Example:
        >>> setup_logging(LoggingConfig(level="DEBUG", file_path="./logs/pageassets.log"))
    """
    handlers: dict[str, dict[str, Any]] = {}

    if config.console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "structured" if config.structured else "standard",
            "stream": "ext://sys.stdout",
        }

    file_handler = config.get_file_handler_config()
    if file_handler is not None:
        Path(file_handler["filename"]).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {**file_handler, "formatter": "structured"}

    for handler in handlers.values():
        handler["level"] = config.level
        handler["filters"] = ["context"]

    handler_names = list(handlers)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {"()": StructuredFormatter},
                "standard": {
                    "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "filters": {"context": {"()": lambda: context_filter}},
            "handlers": handlers,
            "loggers": {
                ROOT_LOGGER: {"level": config.level, "handlers": handler_names, "propagate": False},
            },
        }
    )
    get_logger(__name__).debug(f"Logging configured at level {config.level}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance namespaced under the engine's root logger.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Manifest loaded")
    """
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class LogContext:
    """
    Context manager adding fields to the logging context of the current task.

    Nested contexts stack; leaving one restores exactly what was there before.
    """

    def __init__(self, **kwargs: Any):
        self.context: dict[str, Any] = kwargs
        self._token: Token[dict[str, Any]] | None = None

    def __enter__(self) -> LogContext:
        self._token = _log_context.set({**_log_context.get(), **self.context})
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def log_operation(
    operation: str, logger: logging.Logger | None = None
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for logging function operations.

    Args:
        operation: Description of the operation
        logger: Optional logger instance (defaults to function's module logger)

    Example:
        >>> @log_operation("load_plugin_manifest")
        ... def load_plugin_manifest(path: str):
        ...     pass
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            func_logger = logger or get_logger(func.__module__)

            with LogContext(operation=operation):
                func_logger.info(f"Starting {operation}")
                try:
                    result = func(*args, **kwargs)
                    func_logger.info(f"Completed {operation} successfully")
                    return result
                except Exception as e:
                    func_logger.error(f"Failed {operation}: {str(e)}", exc_info=True)
                    raise

        return wrapper

    return decorator
