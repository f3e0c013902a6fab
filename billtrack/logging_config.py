"""
Custom logging configuration to suppress health check logs
"""

import logging
import logging.config
from typing import Any, Dict

HEALTH_CHECK_PATHS = ("/health", "/healthz")


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out health check requests from uvicorn access logs."""
        if record.name == "uvicorn.access":
            # uvicorn passes (client, method, path, http_version, status)
            args = record.args
            if isinstance(args, tuple) and len(args) >= 3:
                method, path = args[1], str(args[2])
                if method == "GET" and path.split("?")[0] in HEALTH_CHECK_PATHS:
                    return False
        return True


def get_logging_config(log_level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with health check suppression."""
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
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": log_level,
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": log_level,
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": log_level,
                "propagate": False
            },
            "billtrack": {
                "handlers": ["default"],
                "level": log_level,
                "propagate": False
            }
        },
        "root": {
            "level": log_level,
            "handlers": ["default"]
        }
    }
