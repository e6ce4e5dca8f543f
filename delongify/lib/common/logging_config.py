"""Logging configuration for delongify.

Application records go to the ``delongify`` logger. uvicorn's server logger
is given the same handlers, so startup, shutdown and request logs share one
format and destination. The pymongo driver loggers are held at INFO or above.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

LOGGER_NAME = "delongify"
UVICORN_LOGGER = "uvicorn"
PYMONGO_LOGGER = "pymongo"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _build_handlers(level: int, log_file: Optional[str], json_format: bool) -> List[logging.Handler]:
    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def _replace_handlers(logger: logging.Logger, handlers: List[logging.Handler], level: int) -> None:
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Setup logging for the service and the libraries it runs on.

    Calling it again replaces the previous handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path, written in addition to stdout
        json_format: Emit one JSON object per record

    Returns:
        The ``delongify`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    handlers = _build_handlers(numeric_level, log_file, json_format)

    logger = logging.getLogger(LOGGER_NAME)
    _replace_handlers(logger, handlers, numeric_level)
    _replace_handlers(logging.getLogger(UVICORN_LOGGER), handlers, numeric_level)

    # pymongo logs every command and server selection at DEBUG
    logging.getLogger(PYMONGO_LOGGER).setLevel(max(numeric_level, logging.INFO))

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)
