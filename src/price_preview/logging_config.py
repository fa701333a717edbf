"""
Logging setup: structlog on top of stdlib logging, JSON lines to stdout.
"""
import logging
import sys

import structlog


def setup_logging(level: int = logging.INFO) -> None:
    """Configure structlog + standard logging."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    """Get a named structlog logger."""
    return structlog.get_logger(name)
