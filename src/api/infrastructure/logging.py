"""Structlog configuration for hosts embedding the hierarchy engine.

The engine only emits events through structlog loggers owned by its
probes. Hosts that already configure structlog can skip this module;
standalone scripts and tests call configure_logging() once at startup.
"""

import logging
import os
import sys

import structlog

from shared_kernel.observability_context import ObservationContext


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure structlog with appropriate processors.

    Uses colored console output for development (when FORCE_COLOR is set
    or running in a TTY), otherwise uses JSON output for production.

    Args:
        level: Minimum level to emit, as a logging constant or name
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_observation_context(context: ObservationContext) -> None:
    """Bind a request's observation context to every event it logs.

    Probes created without a context still carry these values, because
    merge_contextvars runs first in the processor chain. Call
    clear_observation_context() when the request ends.
    """
    structlog.contextvars.bind_contextvars(**context.as_dict())


def clear_observation_context() -> None:
    """Drop all values bound by bind_observation_context()."""
    structlog.contextvars.clear_contextvars()
