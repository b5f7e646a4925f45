"""Logging configuration for the storefront.

structlog renders every record, including those emitted through the standard
library by uvicorn, Protean and SQLAlchemy, so request context bound with
``add_context`` shows up on all of them.

Rendering follows the environment:

- production, staging: one JSON object per line
- everything else: colored console output with rich tracebacks

``LOG_LEVEL`` overrides the per-environment level. ``LOG_DIR`` enables a
rotating JSON log file alongside the console.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "sqlalchemy.engine", "uvicorn.access")


def current_environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", _LEVELS.get(current_environment(), "INFO")).upper()


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
    )


def _formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_output:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(json_output))
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=processors,
    )


def configure_logging() -> None:
    """Route structlog and standard library logging through one set of handlers."""
    level = get_log_level()
    json_output = current_environment() in ("production", "staging")

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_formatter(json_output))
    handlers: list[logging.Handler] = [console]

    log_dir = os.getenv("LOG_DIR")
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_file = logging.handlers.RotatingFileHandler(
            Path(log_dir) / "storefront.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        log_file.setFormatter(_formatter(json_output=True))
        handlers.append(log_file)

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values onto every log line emitted later in the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
