"""Logging configuration for brokersim.

structlog rendered through stdlib handlers. Level, renderer and log file all
come from ``AppSettings``; the first ``get_logger`` call configures lazily.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

from brokersim.core.settings import get_settings


def _build_handlers(log_file: Path | None) -> list[logging.Handler]:
    """Console handler, plus a rotating file handler when ``log_file`` is set."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is None:
        return handlers

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
        )
    except OSError:
        # Read-only checkout: console only
        pass
    return handlers


def _build_processors(json_output: bool) -> list[Any]:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
) -> structlog.BoundLogger:
    """Configure structured logging once per process.

    Args:
        level: Log level name. Defaults to ``BROKERSIM_LOG_LEVEL``.
        json_output: JSON lines instead of console text. Defaults to
            ``BROKERSIM_JSON_LOGS``.

    Returns:
        Root bound logger.
    """
    if structlog.is_configured():
        return structlog.get_logger()

    settings = get_settings()
    numeric_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    if json_output is None:
        json_output = settings.json_logs

    # No log file under pytest
    log_file = None if os.environ.get("PYTEST_CURRENT_TEST") else settings.log_file

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=_build_handlers(log_file),
        force=True,
    )
    structlog.configure(
        processors=_build_processors(json_output),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Logger bound to ``name``; configures logging on first use."""
    logger = configure_logging()
    if name:
        return logger.bind(logger_name=name)
    return logger
