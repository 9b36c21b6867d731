"""Structured logging for the shade scoring engine.

Each line is ``key=value`` pairs: timestamp, level, logger, message, then
any evaluation context (shade level, spread type, failing metrics) passed
through ``log_with_context``.
"""

import logging
import sys
from typing import Any


def _render(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(item) for item in value) or "none"
    return str(value)


class StructuredFormatter(logging.Formatter):
    """key=value formatter; context fields follow the message."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields.update(getattr(record, "context", {}))

        line = " ".join(f"{key}={_render(value)}" for key, value in fields.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _resolve_level() -> int:
    """LOG_LEVEL when set and valid, else DEBUG in dev and INFO elsewhere."""
    from tarot_shade.core.config import get_settings

    settings = get_settings()
    if settings.LOG_LEVEL:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if isinstance(level, int):
            return level
    if settings.SHADE_ENGINE_ENV == "dev":
        return logging.DEBUG
    return logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger with a single stdout handler using StructuredFormatter
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_resolve_level())

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **context: Any) -> None:
    """Log ``msg`` with evaluation context fields appended as key=value pairs."""
    logger.log(level, msg, extra={"context": context})
