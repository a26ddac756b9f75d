"""Structured logging configuration.

Library code obtains loggers with get_logger(); applications (the CLI)
call configure_logging() once at startup.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, json_output: bool = False, level: int = logging.INFO) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_output: Render events as JSON lines instead of console text
        level: Minimum level emitted
    """
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # Resolve sys.stderr per call so redirected streams are honoured
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger, optionally bound to a component name."""
    if name is not None:
        return structlog.get_logger(component=name)
    return structlog.get_logger()
