"""Centralized logging configuration.

Advisor log lines carry structured extras (``outcome``, ``model``,
``language``, ``attempts``); the JSON formatter lifts them to top-level keys
so outcome dashboards can be built from the log stream alone.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from krishi_sakhi.core.config import settings

ADVICE_LOG_FIELDS = ("outcome", "model", "language", "attempts")

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, timestamped from the record itself."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in ADVICE_LOG_FIELDS:
            value = getattr(record, name, None)
            if value not in (None, ""):
                log_data[name] = value
        if record.exc_info and record.exc_info[1]:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


def build_handler(json_output: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging() -> None:
    """Install a single stdout handler on the root logger."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.addHandler(build_handler(settings.log_json, level))

    # Quiet HTTP client internals
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
