"""
Logging setup for DocSentinel.

Modules log through ``logging.getLogger(__name__)``; this only configures the
root handler once at startup, either human-readable or one JSON object per line.
"""

import json
import logging
import sys

from app.core.utc import utc_now_iso

_PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": utc_now_iso(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure the root logger.

    Replaces any handler installed by a previous call so repeated app
    creation (tests, reloads) doesn't duplicate output.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_docsentinel", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler._docsentinel = True
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(_PLAIN_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())

    # Multipart parsing is chatty at DEBUG
    logging.getLogger("multipart").setLevel(logging.WARNING)
