"""Board Logging — JSON log lines for request rejections, post writes and page views.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Only whitelisted extras are emitted (EXTRA_FIELDS): who acted, which tracking
      identifier and post, and why a request was rejected
    - The tracking secret and one-time tokens are not in the whitelist, so they cannot
      reach the log even if a caller passes them as extras
    - Non-ASCII post content and user names are written as-is (ensure_ascii=False)

Design Decisions:
    - setup_logging runs from the app lifespan and replaces the handler it installed
      earlier, so repeated app startups (tests, reloads) do not duplicate lines
    - fmt="text" gives a plain one-line format for local development
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "user", "tracking_id", "post_id", "user_agent", "remote_address",
    "error_code", "path",
)

_HANDLER_NAME = "board"


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object carrying the board's extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                line[key] = val
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the board's root handler, replacing one from an earlier startup."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
