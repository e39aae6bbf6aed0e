"""Central logging configuration for the sample order service.

Installs a root stdout handler so engine, repository and route loggers emit
INFO-level events without per-module setup. Safe to call repeatedly.
"""
from __future__ import annotations
import logging
from logging.config import dictConfig

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        }
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    "loggers": {
        "sample_order": {"level": "INFO", "propagate": True},
        "uvicorn.access": {"level": "WARNING", "handlers": ["console"], "propagate": False},
    },
}

def configure_logging() -> None:
    """Configure application-wide logging once.

    Returns early when the root logger already has handlers (reloaders,
    pytest's log capture).
    """
    root = logging.getLogger()
    if root.handlers:
        return
    dictConfig(_DICT_CONFIG)
