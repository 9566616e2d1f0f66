"""Logging setup for the stubmapper CLI: structlog rendered through stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

LEVEL_ENV = "STUBMAPPER_LOG_LEVEL"
FORMAT_ENV = "STUBMAPPER_LOG_FORMAT"


def setup_logging(level: str | None = None) -> None:
    """Route structlog events to stderr.

    ``level`` falls back to ``$STUBMAPPER_LOG_LEVEL`` (INFO when unset).
    ``$STUBMAPPER_LOG_FORMAT`` picks ``console`` or ``json`` rendering.
    """
    log_level = (level or os.environ.get(LEVEL_ENV, "INFO")).upper()
    as_json = os.environ.get(FORMAT_ENV, "console").lower() == "json"

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if as_json else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stdout carries `detect --json` output
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["stderr"], "level": log_level},
            "loggers": {
                "stubmapper": {"level": log_level},
                # Faker logs locale loading at DEBUG
                "faker": {"level": "WARNING"},
            },
        }
    )
