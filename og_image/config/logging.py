"""
Logging Configuration
=====================

structlog on top of stdlib logging. Render events are rendered as JSON in
production and as console lines elsewhere.
"""

import logging
import logging.config
import sys
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

from .settings import Settings, get_settings

# Loggers that stay quieter than the application log level
THIRD_PARTY_LOG_LEVELS = {
    "uvicorn": "INFO",
    "playwright": "WARNING",
}


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog and the stdlib handlers it writes through."""
    settings = settings or get_settings()

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
    ]
    if settings.is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(get_logging_config(settings))


def get_logging_config(settings: Settings) -> Dict[str, Any]:
    """stdlib ``dictConfig`` for a single stdout handler."""
    loggers: Dict[str, Any] = {
        "": {"level": settings.log_level, "handlers": ["console"], "propagate": False},
    }
    for name, level in THIRD_PARTY_LOG_LEVELS.items():
        loggers[name] = {"level": level, "handlers": ["console"], "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": "%(message)s"},
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.log_level,
                "formatter": "json" if settings.is_production else "console",
                "stream": sys.stdout,
            },
        },
        "loggers": loggers,
    }


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


setup_logging()
