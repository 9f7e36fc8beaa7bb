"""Logging setup shared by the web app and the CLI.

Pipeline and client log calls pass reading context through ``extra=``; the
formatter renders the keys it knows about after the message as ``key=value``
pairs so a single line carries the sensor, its corrected reading and the
resulting AQI.
"""

from __future__ import annotations

import logging
from enum import Enum
from logging.config import dictConfig
from typing import Any, Iterable, Sequence

from settings import get_settings

READING_CONTEXT_KEYS = (
    "sensor_id",
    "corrected_pm",
    "aqi",
    "level",
    "trend",
    "status_code",
    "reason",
)

_configured = False


def _render_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


class ContextualFormatter(logging.Formatter):
    """Append the reading context found on a record to its formatted message."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._context_keys: Sequence[str] = tuple(
            READING_CONTEXT_KEYS if extra_keys is None else extra_keys
        )

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={_render_value(getattr(record, key))}"
            for key in self._context_keys
            if getattr(record, key, None) is not None
        )
        return f"{message} | {context}" if context else message


def configure_logging(level: str | int | None = None) -> None:
    """Install the contextual formatter on the root logger once per process."""
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "reading": {
                    "()": "logging_config.ContextualFormatter",
                    "fmt": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "extra_keys": list(READING_CONTEXT_KEYS),
                }
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": "reading",
                }
            },
            "root": {"handlers": ["stderr"], "level": log_level},
        }
    )
    _configured = True
