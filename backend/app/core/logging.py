"""Log setup: JSON lines in production, readable text in development."""
import logging
import sys

from pythonjsonlogger import jsonlogger

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Bolt/pool chatter from the driver is only useful when chasing connectivity.
_NOISY_LOGGERS = ("neo4j", "neo4j.io", "neo4j.pool")


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(LOG_FORMAT, rename_fields={"asctime": "timestamp", "levelname": "level"})
    )
    return handler


def setup_logging() -> None:
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if settings.APP_ENV == "production":
        logging.root.handlers = [_json_handler()]
        logging.root.setLevel(level)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
