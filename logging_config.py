from __future__ import annotations

import logging
from logging.config import dictConfig

from settings import get_settings

_CONTEXT_KEYS = (
    "generation",
    "page",
    "page_size",
    "mode",
    "status",
    "result_count",
    "error_kind",
)

_configured = False


class ContextualFormatter(logging.Formatter):
    """Append known ``extra`` fields to each record as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context_parts: list[str] = []
        for key in _CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                context_parts.append(f"{key}={value}")
        if context_parts:
            return f"{message} | {' '.join(context_parts)}"
        return message


def configure_logging(level: str | int | None = None) -> None:
    """Configure process-wide logging once; later calls are ignored."""
    global _configured
    if _configured:
        return

    settings = get_settings()
    log_level = level if level is not None else settings.log_level

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "contextual": {
                    "()": "logging_config.ContextualFormatter",
                    "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                }
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "level": log_level,
                    "formatter": "contextual",
                }
            },
            # httpx logs every request at INFO; the fetcher already does.
            "loggers": {
                "httpx": {"level": "WARNING"},
                "httpcore": {"level": "WARNING"},
            },
            "root": {"handlers": ["stderr"], "level": log_level},
        }
    )

    _configured = True
