"""
Log output for sslguard.

The guard, the middleware and the application object log through child
loggers of "sslguard". Redirect records carry the controller, action, prefix
and location they were decided for as record extras; the formatters below
render those next to the message.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, IO, Optional

ROOT_LOGGER = "sslguard"

# Extras attached by SecureRouteMiddleware to redirect records
REDIRECT_FIELDS = ("controller", "action", "prefix", "location")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[41m",
}
RESET = "\033[0m"


def redirect_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """The redirect extras present on a record, skipping unset ones."""
    return {
        field: getattr(record, field)
        for field in REDIRECT_FIELDS
        if getattr(record, field, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, redirect details under "redirect"."""

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        redirect = redirect_fields(record)
        if redirect:
            entry["redirect"] = redirect
        environment = getattr(record, "environment", None)
        if environment:
            entry["environment"] = environment
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class TextFormatter(logging.Formatter):
    """
    Single-line text output, e.g.

        2024-05-01 12:00:00 INFO [sslguard.middleware.secure_route] Redirecting GET /users/login to https location=https://shop/users/login
    """

    def __init__(self, colored: bool = True):
        super().__init__(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.colored = colored

    def format(self, record):
        levelname = record.levelname
        if self.colored and levelname in LEVEL_COLORS:
            record.levelname = f"{LEVEL_COLORS[levelname]}{levelname}{RESET}"
        try:
            line = super().format(record)
        finally:
            record.levelname = levelname

        pairs = [f"{key}={value}" for key, value in redirect_fields(record).items()]
        if pairs:
            line += " " + " ".join(pairs)
        return line


class EnvironmentAdapter(logging.LoggerAdapter):
    """Adds ``environment`` to each record while keeping the caller's own extras."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def configure_logging(
    level: int = logging.INFO,
    json_logs: bool = False,
    colored: bool = True,
    environment: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.LoggerAdapter:
    """
    Send sslguard records to ``stream`` (stderr by default) and return an adapter for it.

    Calling it again replaces the previous handler instead of adding a second one.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter() if json_logs else TextFormatter(colored=colored))
    logger.addHandler(handler)

    return EnvironmentAdapter(logger, {"environment": environment})
