"""Structured logging setup shared by the HTTP entry point and local mode."""

from __future__ import annotations

import logging
from typing import Union

import structlog


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name such as ``"warning"`` into its numeric value."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Render structlog events as JSON lines through the standard logging module.

    Only the first call configures anything.
    """

    if getattr(setup_logging, "_configured", False):  # type: ignore[attr-defined]
        return

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=resolve_level(level), format="%(message)s")

    setup_logging._configured = True  # type: ignore[attr-defined]
