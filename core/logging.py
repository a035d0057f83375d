# core/logging.py
import structlog
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from core.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None):
    """Configure structured logging with proper formatting"""
    settings = settings or get_settings()

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if settings.debug else settings.log_level,
    )
    logging.getLogger().setLevel(logging.DEBUG if settings.debug else settings.log_level)

    # Silence noisy loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_timestamp,
        _service_context(settings),
    ]

    if settings.debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def add_timestamp(logger, method_name, event_dict):
    """Add timestamp to log events"""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _service_context(settings: Settings):
    def add_service_context(logger, method_name, event_dict):
        event_dict["environment"] = settings.environment
        event_dict["service"] = settings.service_name
        event_dict["version"] = settings.app_version
        return event_dict

    return add_service_context


class ServiceLogger:
    """Thin wrapper around a structlog logger"""

    def __init__(self, name: str):
        self.logger = structlog.get_logger(name)

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message, **kwargs)

    def log_request(self, method: str, path: str, route: str, status_code: int, duration: float):
        """Log a finished HTTP request"""
        self.debug(
            "HTTP request completed",
            method=method,
            path=path,
            route=route,
            status_code=status_code,
            duration_ms=round(duration * 1000, 2),
        )


logger = ServiceLogger("thrive")
