"""
Structured logging for the SellerCenter client.

Listing calls, feed submissions and skipped malformed entries are logged as
key/value events (action, SKU counts, feed id, error code). Output goes to
stderr so that CLI output on stdout stays machine readable.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

# Transport libraries that log every request line at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _processors(json_format: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure logging for the client and its CLI.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). DEBUG
            also shows built feed payload sizes and parse summaries.
        json_format: One JSON object per event instead of console output.
        log_file: Optional file that also receives standard library records.
    """
    log_level = getattr(logging, level.upper())

    structlog.configure(
        processors=_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str) -> structlog.BoundLogger:
    """Module logger; call with ``__name__``."""
    return structlog.get_logger(name)


class LogContext:
    """
    Bind key/value pairs to every event logged inside the block.

    Used to tag all events of one feed submission with its action:

        >>> with LogContext(feed_action="ProductUpdate"):
        ...     logger.info("Feed accepted", feed_id=request_id)
    """

    def __init__(self, **context):
        self.context = context

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        structlog.contextvars.unbind_contextvars(*self.context)
