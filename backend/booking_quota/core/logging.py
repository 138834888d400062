"""
Structured logging configuration using structlog.

Every event carries the service name and version so quota decisions can
be told apart from the booking service's own logs when both ship to the
same sink. JSON in production, console rendering otherwise.
Decision logging has its own level (QUOTA_LOG_LEVEL): set it to DEBUG to
see the anchor resolved for every booking set check.
"""

import logging
import sys
import structlog
from booking_quota.core.config import get_settings

QUOTA_LOGGERS = (
    "booking_quota.services.quota_service",
    "booking_quota.infrastructure",
)

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "redis")


def _service_fields(app_name: str, version: str):
    def add_service_fields(logger, method_name, event_dict):
        event_dict.setdefault("service", app_name)
        event_dict.setdefault("service_version", version)
        return event_dict

    return add_service_fields


def setup_logging() -> None:
    settings = get_settings()

    processors = [
        structlog.contextvars.merge_contextvars,
        _service_fields(settings.APP_NAME, settings.APP_VERSION),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if settings.ENVIRONMENT == "production":
        processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer]
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    quota_level = getattr(logging, settings.QUOTA_LOG_LEVEL.upper(), logging.INFO)
    for name in QUOTA_LOGGERS:
        logging.getLogger(name).setLevel(quota_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
