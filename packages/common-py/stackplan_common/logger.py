"""
StackPlan Structured Logger

Emits one JSON object per line, on stdout by default, so plan generation can
be traced by whatever wraps it (CI logs, build renderers). Entry points that
print their own output on stdout send logs to stderr instead.

All loggers live under the ``stackplan`` stdlib logger, which owns the
single stream handler and the effective level.

Usage:
    from stackplan_common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Provider detected", provider="node")

    scoped = logger.with_context(source="/app")
    scoped.debug("Reading manifest", path="package.json")
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .constants import LOG_LEVELS, LOG_STREAMS

ROOT_LOGGER_NAME = "stackplan"


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", record.name),
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "fields", {}))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class _StdStreamHandler(logging.StreamHandler):
    """Writes to whatever ``sys.<target>`` is at emit time."""

    def __init__(self, target: str = "stdout"):
        self.target = target
        super().__init__()

    @property
    def stream(self):
        return getattr(sys, self.target)

    @stream.setter
    def stream(self, value):
        pass


def _validate_level(log_level: str) -> str:
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level '{log_level}'. Valid levels: {', '.join(LOG_LEVELS)}")
    return level


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = _StdStreamHandler()
        handler.setFormatter(_JSONFormatter())
        root.addHandler(handler)
        root.setLevel(logging.WARNING)
        root.propagate = False
    return root


class StackPlanLogger:
    """
    Structured logger bound to a service name and optional context.

    Keyword arguments passed to a log call are merged with the bound
    context and written as top-level JSON fields.
    """

    def __init__(
        self,
        service_name: str,
        log_level: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.service_name = service_name
        self.context: Dict[str, Any] = dict(context or {})
        _root_logger()
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{service_name}")
        if log_level is not None:
            self._logger.setLevel(_validate_level(log_level))

    def with_context(self, **kwargs: Any) -> "StackPlanLogger":
        """Return a new logger with additional bound context."""
        return StackPlanLogger(self.service_name, context={**self.context, **kwargs})

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={"service": self.service_name, "fields": {**self.context, **kwargs}},
        )

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    warn = warning

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)


def get_logger(service_name: str, log_level: Optional[str] = None) -> StackPlanLogger:
    """
    Get a structured logger for a service or module.

    Args:
        service_name: Name written in the ``service`` field of each line
        log_level: Optional per-logger level; inherits the root level otherwise

    Returns:
        StackPlanLogger instance
    """
    return StackPlanLogger(service_name, log_level=log_level)


def configure_logging(
    service_name: str,
    log_level: str = "WARNING",
    stream: str = "stdout",
) -> StackPlanLogger:
    """
    Set the level and output stream for every StackPlan logger and return
    one for ``service_name``.

    Intended to be called once from entry points (e.g. the CLI).

    Args:
        service_name: Service name of the returned logger
        log_level: One of LOG_LEVELS
        stream: "stdout" or "stderr"

    Raises:
        ValueError: If the level or stream is unknown
    """
    if stream not in LOG_STREAMS:
        raise ValueError(f"Invalid log stream '{stream}'. Valid streams: {', '.join(LOG_STREAMS)}")
    root = _root_logger()
    root.setLevel(_validate_level(log_level))
    for handler in root.handlers:
        if isinstance(handler, _StdStreamHandler):
            handler.target = stream
    return get_logger(service_name)
