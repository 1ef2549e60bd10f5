"""Structured logging setup for jsonbound.

Uses structlog; output goes to stderr so stdout stays free for estimate JSON.
"""

import sys

import structlog


def configure_logging(json_output: bool = False) -> None:
    """Configure structlog for jsonbound.

    Args:
        json_output: If True, render logs as JSON.
                     If False (default), use console-friendly output.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
