"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Ledger extras (invoice/client/payment ids, status_from/status_to, error_code,
      path) are surfaced when present, stringified (UUID, Decimal)
    - setup_logging is idempotent: a second call replaces its handler, never stacks one

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency, one line per event
    - SQLAlchemy engine logging pinned to WARNING unless the app runs at DEBUG
"""

import json
import logging
from datetime import datetime, timezone

LEDGER_FIELDS = (
    "invoice_id", "client_id", "payment_id", "error_code",
    "status_from", "status_to", "path",
)

_HANDLER_NAME = "faktur"


class JSONFormatter(logging.Formatter):
    """Format logs as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in LEDGER_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = str(val)
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure the root logger once per process (safe to call again)."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)

    numeric = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if numeric <= logging.DEBUG else logging.WARNING,
    )
