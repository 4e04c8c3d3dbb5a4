"""Structured logging for the conventions package.

Every component logs through a `ConventionLogger` named
``conventions.<component>``. Loggers carry a context (component, operation,
extra fields) that formatters render either as a text prefix or as JSON keys.
"""

import json
import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LogFormat(Enum):
    """Log output format."""

    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class LogContext:
    """Context fields attached to every record a logger emits."""

    component: str = ""
    operation: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def with_extra(self, **kwargs: Any) -> "LogContext":
        """Create new context with additional fields."""
        return LogContext(self.component, self.operation, {**self.extra, **kwargs})


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        ctx = getattr(record, "context", None)
        if isinstance(ctx, LogContext):
            if ctx.component:
                log_data["component"] = ctx.component
            if ctx.operation:
                log_data["operation"] = ctx.operation
            log_data.update(ctx.extra)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Formatter that prefixes records with their component and operation."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        ctx = getattr(record, "context", None)
        if not isinstance(ctx, LogContext):
            return base

        prefix = ""
        if ctx.component:
            prefix += f"[{ctx.component}] "
        if ctx.operation:
            prefix += f"({ctx.operation}) "
        extra = "".join(f" {k}={v}" for k, v in ctx.extra.items())
        return f"{prefix}{base}{extra}"


def _make_handler(level: int, log_format: LogFormat) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if log_format == LogFormat.JSON:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(TextFormatter("%(asctime)s %(levelname)s %(message)s"))
    return handler


class ConventionLogger:
    """Logger bound to a component and optional operation context."""

    def __init__(
        self,
        name: str,
        level: int = logging.INFO,
        log_format: LogFormat = LogFormat.TEXT,
    ):
        self._logger = logging.getLogger(f"conventions.{name}")
        self._logger.setLevel(level)
        self._context = LogContext(component=name)

        if not self._logger.handlers:
            self._logger.addHandler(_make_handler(level, log_format))

    @property
    def name(self) -> str:
        return self._logger.name

    def _derive(self, context: LogContext) -> "ConventionLogger":
        derived = ConventionLogger.__new__(ConventionLogger)
        derived._logger = self._logger
        derived._context = context
        return derived

    def with_context(self, **kwargs: Any) -> "ConventionLogger":
        """Create a logger that adds ``kwargs`` to every record."""
        return self._derive(self._context.with_extra(**kwargs))

    def with_operation(self, operation: str) -> "ConventionLogger":
        """Create a logger for a specific operation."""
        return self._derive(LogContext(self._context.component, operation, self._context.extra))

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def _log(self, level: int, msg: str, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(
            self._logger.name, level, "(unknown file)", 0, msg, (), None
        )
        record.context = self._context.with_extra(**kwargs) if kwargs else self._context
        self._logger.handle(record)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, **kwargs)


_loggers: dict[str, ConventionLogger] = {}


def get_logger(
    name: str,
    level: int = logging.INFO,
    log_format: LogFormat = LogFormat.TEXT,
) -> ConventionLogger:
    """Get or create the logger for a component."""
    if name not in _loggers:
        _loggers[name] = ConventionLogger(name, level, log_format)
    return _loggers[name]


def configure_logging(
    level: int = logging.INFO,
    log_format: LogFormat = LogFormat.TEXT,
) -> None:
    """Route all ``conventions.*`` loggers through one handler on the root package logger."""
    root = logging.getLogger("conventions")
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(_make_handler(level, log_format))

    for logger in _loggers.values():
        logger._logger.handlers.clear()
        logger._logger.setLevel(logging.NOTSET)
