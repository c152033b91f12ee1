"""
Structured log output for sitegraph runs.

Every record becomes one JSON object per line. Fields passed through
``extra=`` (for example ``site_dir``) and dict messages end up as top-level
keys, so a run can be filtered with ``jq`` by site or event.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

DEFAULT_PATH = os.environ.get("SITEGRAPH_LOG_PATH", "./sitegraph.log.jsonl")
DEFAULT_LEVEL = os.environ.get("SITEGRAPH_LOG_LEVEL", "INFO").upper()

LOG_SCHEMA = {"name": "sitegraph.log", "ver": "1.0.0"}

# Attributes every LogRecord carries; anything else on a record came from extra=.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonlFormatter(logging.Formatter):
    """Formats a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": LOG_SCHEMA,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if isinstance(record.msg, dict):
            payload.update(record.msg)
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS:
                payload.setdefault(key, value)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class JsonlHandler(logging.FileHandler):
    """Appends JSONL records to ``path``, creating its directory on first use."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(self.path, mode="a", encoding="utf-8", delay=True)
        self.setFormatter(JsonlFormatter())


def init_json_logging(path: str | Path | None = None, level: str | None = None) -> JsonlHandler:
    """
    Route all sitegraph logging to a JSONL file.

    Args:
        path: Log file (defaults to SITEGRAPH_LOG_PATH or ./sitegraph.log.jsonl)
        level: Level name for the root logger (defaults to SITEGRAPH_LOG_LEVEL or INFO)

    Returns:
        The installed handler. A handler from an earlier call is closed and replaced.
    """
    path = path or DEFAULT_PATH
    level = (level or DEFAULT_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    for existing in list(root.handlers):
        if isinstance(existing, JsonlHandler):
            root.removeHandler(existing)
            existing.close()
    handler = JsonlHandler(path)
    root.addHandler(handler)
    return handler
