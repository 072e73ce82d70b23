"""structlog setup for the command line."""

from __future__ import annotations

import logging
import os
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Render log events to stderr; debug events only when verbose.

    ``INTL_EXTRACT_DEBUG=1`` in the environment also enables debug output.
    """
    if os.environ.get("INTL_EXTRACT_DEBUG"):
        verbose = True
    level = logging.DEBUG if verbose else logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
