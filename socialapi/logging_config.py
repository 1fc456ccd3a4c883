"""Logging setup: human-readable in development, JSON lines in production."""

import json
import logging
from datetime import UTC, datetime

_EXTRA_FIELDS = ("user_id", "post_id", "action", "path", "status_code")


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            value = record.__dict__.get(key)
            if value is not None:
                log[key] = value
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger once at startup."""
    root = logging.getLogger()
    # Re-running the app factory (tests, reloader) must not stack handlers
    for handler in list(root.handlers):
        if getattr(handler, "_socialapi", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._socialapi = True  # type: ignore[attr-defined]
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
