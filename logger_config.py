"""
Logging configuration for block handlers.

Every record carries the correlation id of the handler invocation that
produced it, so the output of one block run can be followed across the
invoker, STS and serialization modules. The level is taken from the
validated app configuration once a handler has built it.
"""
import logging
import sys
from contextvars import ContextVar
from typing import Dict, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s'
DEFAULT_LEVEL = 'INFO'

_correlation_id: ContextVar[str] = ContextVar('correlation_id', default='-')
_loggers: Dict[str, logging.Logger] = {}
_level = DEFAULT_LEVEL


class CorrelationIdFilter(logging.Filter):
    """Stamp records with the current invocation's correlation id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, 'correlation_id', None):
            record.correlation_id = _correlation_id.get()
        return True


def set_correlation_id(correlation_id: str):
    """Bind a correlation id to the current context; returns a reset token."""
    return _correlation_id.set(correlation_id)


def get_correlation_id() -> str:
    return _correlation_id.get()


def reset_correlation_id(token) -> None:
    _correlation_id.reset(token)


def set_log_level(level: str) -> None:
    """
    Apply a log level to every logger handed out by get_logger.

    Args:
        level: Level name, already validated by config.Config
    """
    global _level
    _level = level.upper()
    for logger in _loggers.values():
        _apply_level(logger)


def _apply_level(logger: logging.Logger) -> None:
    level = getattr(logging, _level, logging.INFO)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (defaults to this module's name if not provided)

    Returns:
        Logger writing to stdout, where the workflow host collects output
    """
    name = name or __name__
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)

    # Records are emitted once, by our own handler
    logger.propagate = False

    _loggers[name] = logger
    _apply_level(logger)
    return logger
