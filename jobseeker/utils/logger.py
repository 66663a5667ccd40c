"""
Logging Configuration

structlog setup for the scanner. Records are rendered as JSON lines (or
coloured console output when DEBUG is on) through the standard library
logging tree, so third-party libraries share the same handlers.
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import structlog
from structlog.stdlib import LoggerFactory
from pythonjsonlogger import jsonlogger

from jobseeker.core.config import Settings, get_settings

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite")


def _file_handler(path: str) -> logging.Handler:
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(
        jsonlogger.JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")
    )
    return handler


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Called once by the CLI before any command runs; importing the package
    never touches logging configuration.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    renderer = (
        structlog.dev.ConsoleRenderer() if settings.DEBUG
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    if not settings.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    if settings.LOG_FILE:
        logging.getLogger().addHandler(_file_handler(settings.LOG_FILE))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, typically for ``__name__``."""
    return structlog.get_logger(name)


@contextmanager
def scan_context(**values: Any) -> Iterator[None]:
    """
    Bind values (source, user_id, ...) to every record logged inside the block.

    Uses contextvars, so concurrent fetch tasks started inside the block
    inherit the binding.
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield


def log_scraping_activity(
    source: str,
    action: str,
    url: Optional[str] = None,
    external_id: Optional[str] = None,
    **kwargs
) -> None:
    """
    Log one scraping event.

    Args:
        source: Job board name
        action: What happened, e.g. ``page_scraped``
        url: Search page or posting URL
        external_id: Posting the event refers to
        **kwargs: Counts and other event data
    """
    get_logger("scraping").info(
        "Scraping activity",
        source=source,
        action=action,
        url=url,
        external_id=external_id,
        **kwargs
    )


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    **kwargs
) -> None:
    """Log an exception with its type, message and caller context."""
    get_logger("errors").error(
        "Error occurred",
        error_type=type(error).__name__,
        error_message=str(error),
        context=context or {},
        **kwargs
    )
