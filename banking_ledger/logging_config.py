"""
Structured logging configuration.

Every record emitted under the ``banking_ledger`` logger is
rendered as a single JSON object so that ledger events can be
grepped and parsed without a log shipper.
"""

import json
import logging
from datetime import datetime, timezone

ROOT_LOGGER = "banking_ledger"


class JSONFormatter(logging.Formatter):
    """Render log records as JSON."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
            "action": getattr(record, "action", None),
            "resource": getattr(record, "resource", None),
        }

        # Drop fields the caller did not supply
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the application logger.

    Safe to call more than once: existing handlers are replaced,
    so repeated setup (tests, reloads) never duplicates output.
    """
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger
