"""
Structured logging setup for the warranty-days service.

Development environments get human-readable console output; everything else
gets one JSON object per line.
"""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from structlog.stdlib import LoggerFactory

SERVICE_NAME = "warranty_days"
DEV_ENVS = ("", "dev", "development", "local")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_level(level: Optional[str]) -> int:
    """Map a level name to a logging level, defaulting to INFO."""
    return _LEVELS.get((level or "info").strip().lower(), logging.INFO)


def normalize_env(app_env: Optional[str]) -> str:
    return (app_env or "").strip().lower()


def is_dev_env(app_env: Optional[str]) -> bool:
    return normalize_env(app_env) in DEV_ENVS


def setup_logging(log_level: str = "info", app_env: str = "development") -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        log_level: debug, info, warn/warning or error
        app_env: APP_ENV value; selects console or JSON rendering
    """
    env = normalize_env(app_env)

    def add_service_context(
        logger, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        event_dict.setdefault("service", SERVICE_NAME)
        event_dict.setdefault("env", env)
        return event_dict

    if is_dev_env(env):
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            add_service_context,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=parse_level(log_level),
        force=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance (usually for __name__)."""
    return structlog.get_logger(name)
