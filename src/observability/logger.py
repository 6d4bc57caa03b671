"""
Structured Logging

All modules log through structlog with event-style messages and key/value
context, e.g. ``logger.info("planner_built", event_count=12)``.

Logging is a side channel only: no calculation result ever depends on it.
"""

import logging

import structlog

from src.config import AppSettings, get_settings


_configured = False


def resolve_level(app: AppSettings) -> int:
    """Debug mode forces DEBUG; otherwise the configured level name."""
    if app.debug_mode:
        return logging.DEBUG
    return getattr(logging, app.log_level, logging.INFO)


def add_environment(environment: str):
    """Processor stamping every event with the application environment."""

    def processor(logger, method_name, event_dict):
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def configure_logging() -> None:
    """Configure structlog and the stdlib root logger once per process."""
    global _configured
    if _configured:
        return

    app = get_settings().app
    logging.basicConfig(format="%(message)s", level=resolve_level(app))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_environment(app.app_environment),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a named structured logger, configuring logging on first use."""
    configure_logging()
    return structlog.get_logger(name)
