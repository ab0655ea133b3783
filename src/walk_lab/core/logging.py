"""Structured logging setup for Walk Lab.

Worker processes of a parallel batch start with a blank logging config;
the aggregator hands them ``package_level()`` and they call
``setup_logging`` with it, so per-trial DEBUG records look the same from
every process.
"""

from __future__ import annotations

import logging
import logging.config

PACKAGE_LOGGER = "walk_lab"
LOG_FORMAT = "%(asctime)s | %(processName)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for the package; records go to stderr."""
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            PACKAGE_LOGGER: {
                "level": level.upper(),
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": ["console"],
        },
    }
    logging.config.dictConfig(config)


def package_level() -> str:
    """Effective level name of the package logger, for handing to workers."""
    return logging.getLevelName(logging.getLogger(PACKAGE_LOGGER).getEffectiveLevel())
