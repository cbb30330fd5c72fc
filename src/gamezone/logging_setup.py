"""Process-wide logging configuration.

Library modules only create loggers (``logging.getLogger(__name__)``); the
CLI calls :func:`configure_logging` once at startup with the level and format
from :mod:`gamezone.config`.
"""

from __future__ import annotations

import logging.config

from gamezone.config import LoggingSettings

FORMATS = {
    "simple": "%(levelname)s %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
}


def build_logging_config(settings: LoggingSettings) -> dict:
    """Return a ``dictConfig`` mapping for ``settings``."""
    fmt = FORMATS.get(settings.format, FORMATS["detailed"])
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": fmt}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            "gamezone": {"level": settings.level, "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(settings: LoggingSettings) -> None:
    logging.config.dictConfig(build_logging_config(settings))
