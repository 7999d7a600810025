"""
Logging for the `streamify` logger, formatted like uvicorn's own output.
"""

import logging
import os
from logging.config import dictConfig

LOGGER_NAME = "streamify"
LOG_FORMAT = "%(levelprefix)s | %(asctime)s | %(name)s | %(message)s"


def create_log_config(log_level: str, log_format: str = LOG_FORMAT) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": log_format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["default"], "level": log_level.upper()},
        },
    }


def setup_logging(log_level: str, log_format: str = LOG_FORMAT) -> None:
    dictConfig(create_log_config(log_level, log_format))


# reconfigured from Settings once the app starts
setup_logging("DEBUG" if os.environ.get("DEBUG") else "INFO")
logger = logging.getLogger(LOGGER_NAME)
