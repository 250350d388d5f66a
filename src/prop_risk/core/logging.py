"""Logging setup for the Prop Firm Risk Engine.

Everything under the ``prop_risk`` namespace goes to one stderr handler.
The engine loggers (``prop_risk.engine.*``) get their own level because
every Monte Carlo batch emits a DEBUG summary, and a comparison runs
several batches; turning the package up to DEBUG leaves them quiet unless
``engine_level`` is raised too.
"""

from __future__ import annotations

import logging
import logging.config

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
PACKAGE_LOGGER = "prop_risk"
ENGINE_LOGGER = "prop_risk.engine"


def setup_logging(level: str = "INFO", engine_level: str = "INFO") -> None:
    """Configure the package handler and the engine logger level.

    Args:
        level: Level for the package logger (CLI, config, export)
        engine_level: Level for the calculator and simulators
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "report": {
                "format": LOG_FORMAT,
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "report",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            PACKAGE_LOGGER: {
                "level": level.upper(),
                "handlers": ["stderr"],
                "propagate": False,
            },
            ENGINE_LOGGER: {
                "level": engine_level.upper(),
            },
        },
    }
    logging.config.dictConfig(config)


def get_logger(component: str) -> logging.Logger:
    """Logger nested under the package namespace, e.g. ``prop_risk.report``."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{component}")
