"""Centralized logging configuration for DependencyMapper"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler

from config import LOG_BACKUP_COUNT, LOG_FILE, LOG_MAX_BYTES, STATE_DIR

_logger: logging.Logger | None = None
_analysis_id: ContextVar[str | None] = ContextVar("analysis_id", default=None)


class StructuredFormatter(logging.Formatter):
    """Formatter that includes extra fields as JSON."""

    RESERVED_ATTRS = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
        "asctime",
    }

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.RESERVED_ATTRS
        }

        if extra:
            try:
                extra_str = json.dumps(extra, default=str, ensure_ascii=False)
                return f"{base} | {extra_str}"
            except (TypeError, ValueError):
                return base

        return base


class AnalysisIdFilter(logging.Filter):
    """Tags records emitted during an analysis run with that run's id."""

    def filter(self, record: logging.LogRecord) -> bool:
        analysis_id = _analysis_id.get()
        if analysis_id is not None and not hasattr(record, "analysis_id"):
            record.analysis_id = analysis_id
        return True


def begin_analysis() -> str:
    """Starts a new analysis run; records logged until end_analysis() carry its id."""
    analysis_id = uuid.uuid4().hex[:12]
    _analysis_id.set(analysis_id)
    return analysis_id


def end_analysis() -> None:
    _analysis_id.set(None)


def current_analysis_id() -> str | None:
    return _analysis_id.get()


def setup_logger(name: str = "DependencyMapper") -> logging.Logger:
    """
    Sets up a rotating file logger with stderr output.
    stdout is left alone because it carries the MCP stdio transport.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is not None:
        return _logger

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    logger.handlers.clear()
    logger.filters.clear()
    logger.addFilter(AnalysisIdFilter())

    formatter = StructuredFormatter(
        fmt="[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        STATE_DIR.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            LOG_FILE, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except Exception as e:
        sys.stderr.write(f"Warning: Could not setup file logging: {e}\n")

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Gets the configured logger instance.
    Creates it if it doesn't exist.

    Returns:
        Logger instance
    """
    if _logger is None:
        return setup_logger()
    return _logger
