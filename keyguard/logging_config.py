"""
Logging setup for the key service.

Service and uvicorn logs share one stream; key access decisions get their
own handler so they stay visible when the service level is raised.
"""

import logging
import logging.config
from typing import Any, Dict


class HealthCheckFilter(logging.Filter):
    """Drop liveness probe requests from the uvicorn access log."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not ("/healthz" in message and "GET" in message)


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Build the dictConfig mapping for the given service level."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {
                "()": HealthCheckFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            },
            "audit": {
                "format": "%(asctime)s - AUDIT - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter"]
            },
            "audit": {
                "class": "logging.StreamHandler",
                "formatter": "audit",
                "stream": "ext://sys.stdout"
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": level,
                "propagate": False
            },
            "keyguard": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            # Key access decisions are always recorded, whatever the service level
            "keyguard.audit": {
                "handlers": ["audit"],
                "level": "INFO",
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
