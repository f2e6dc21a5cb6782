"""
app/core/logger.py

Logging setup for the service.

The root logger gets one stdout handler, built from a dictConfig so the
format and per-library levels live in one place. Modules obtain loggers
with:

    from app.core.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import logging.config
from typing import Any, Dict, Optional

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

#: Third-party loggers held above the service level.
QUIET_LOGGERS = {
    "uvicorn.access": "WARNING",   # one line per request; uploads log their own
    "python_multipart": "WARNING",
}


def resolve_level(debug: bool, override: Optional[str] = None) -> str:
    """Level name for the root logger: an explicit override wins over *debug*."""
    if override:
        return override.upper()
    return "DEBUG" if debug else "INFO"


def build_logging_config(level: str) -> Dict[str, Any]:
    """The dictConfig mapping used by configure_logging()."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "service": {"format": LOG_FORMAT, "datefmt": LOG_DATE_FORMAT},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "service",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {name: {"level": lvl} for name, lvl in QUIET_LOGGERS.items()},
        "root": {"level": level, "handlers": ["stdout"]},
    }


def configure_logging(force: bool = False) -> bool:
    """
    Install the service logging setup.

    Does nothing when the root logger already has handlers (pytest, uvicorn
    --log-config) unless *force* is set. Returns True when it configured.
    """
    if logging.getLogger().handlers and not force:
        return False
    level = resolve_level(settings.debug, settings.log_level)
    logging.config.dictConfig(build_logging_config(level))
    return True


configure_logging()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
