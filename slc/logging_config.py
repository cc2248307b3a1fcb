"""
Structured logging for the SL front-end.

Every module logs through `logging.getLogger(__name__)`, so all records end
up under the `slc` logger. setup_logging() attaches a JSON formatter there.
"""

import json
import logging
import threading
from datetime import datetime
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "slc"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "thread": threading.current_thread().name,
        }

        # Parser diagnostics attach their kind and position here
        if hasattr(record, "extra_data"):
            log_entry.update(record.extra_data)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Send `slc` log records to `stream` (stderr by default) as JSON lines.

    Calling it again replaces the previously installed handler.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    handler.setLevel(level)
    logger.addHandler(handler)

    return logger
