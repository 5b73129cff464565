"""
Centralized logging configuration using structlog.
Call configure_logging() once from an entrypoint before wiring adapters.
"""

import logging
import sys
from typing import Optional

import structlog


def configure_logging(level: str = "INFO", fmt: str = "text", service_name: Optional[str] = None) -> None:
    """Configure stdlib logging and the structlog processor chain.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt:   'json' for machine-readable lines, anything else for console output.
        service_name: Bound into every event as ``service`` when given.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str, **initial_context) -> structlog.stdlib.BoundLogger:
    """Module logger; *initial_context* is bound lazily so it is safe at import time."""
    return structlog.get_logger(name, **initial_context)
