import logging
import sys
from typing import Optional

import structlog

from readiness_engine.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configures structlog for structured logging.

    LOG_FORMAT="json" renders one JSON object per line; "console" renders
    a human-readable key=value line for local development.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            # Add contextual data from bind_contextvars() calls.
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=settings.SERVICE_NAME)
