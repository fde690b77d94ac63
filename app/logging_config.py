"""Logging configuration."""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from app.config import settings

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging() -> None:
    """Configure the root logger, with JSON output unless disabled."""
    handler = logging.StreamHandler(sys.stdout)

    if settings.log_json:
        formatter = JsonFormatter(
            fmt=PLAIN_FORMAT,
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
        )
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )
