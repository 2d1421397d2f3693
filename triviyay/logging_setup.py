"""Central logging configuration for the TriviYay service.

Installs a single stdout handler on the root logger so module loggers emit
without per-module setup. The level comes from ``LOG_LEVEL`` (default INFO).
Uvicorn loggers share the same handler and calling twice is a no-op.
"""
from __future__ import annotations
import logging
import os
from logging.config import dictConfig

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.error": {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": level, "handlers": ["console"], "propagate": False},
            # SQL echo stays off unless asked for explicitly
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }


def configure_logging(level: str | None = None) -> None:
    """Configure application-wide logging once.

    Returns early when the root logger already has handlers (reloaders,
    pytest's capture plugin) so output is never duplicated.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    resolved = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    if resolved not in logging.getLevelNamesMapping():
        resolved = "INFO"
    dictConfig(_dict_config(resolved))
