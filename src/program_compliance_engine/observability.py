"""Structured logging setup for the program compliance engine.

Every module obtains its logger through get_logger(__name__) and logs
events as a short message plus keyword context:

    logger.info("Maturity analytics composed", program_id=..., overall_score=...)

configure_logging() is called once at application startup. Until it is
called, structlog's default configuration applies, which is fine for tests.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog processors and the stdlib root logger.

    Args:
        level: Minimum log level name (e.g., "DEBUG", "INFO").
        json_output: Render events as JSON lines instead of console output.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    renderer: structlog.typing.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structured logger bound to the given module name.

    Args:
        name: Usually the calling module's __name__.

    Returns:
        A structlog logger accepting keyword context on every call.
    """
    return structlog.get_logger(name)
