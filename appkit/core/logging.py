"""
Logging configuration for appkit.

This module sets up logging with human-readable formatting for development
and JSON formatting for machine consumption. App clients and the
conformance harness log through the standard library loggers configured here.
"""

import logging
import logging.config
import sys


def setup_logging(log_level: str = "INFO", debug: bool = False, json_format: bool = False) -> None:
    """
    Configure application logging.

    Args:
        log_level: The log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        debug: Whether to include file and line information in records
        json_format: Whether to emit records as JSON objects
    """
    if json_format:
        formatter = "json"
    elif debug:
        formatter = "detailed"
    else:
        formatter = "default"

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "detailed": {
                "format": (
                    "%(asctime)s - %(name)s - %(levelname)s - "
                    "[%(filename)s:%(lineno)d] - %(message)s"
                )
            },
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": (
                    "%(asctime)s %(name)s %(levelname)s %(filename)s "
                    "%(lineno)d %(message)s"
                )
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stderr,
                "formatter": formatter,
                "level": log_level
            }
        },
        "loggers": {
            "": {  # Root logger
                "level": log_level,
                "handlers": ["console"],
                "propagate": False
            },
            "appkit": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False
            },
            "httpx": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False
            },
            "httpcore": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)
