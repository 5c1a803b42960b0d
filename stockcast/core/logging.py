"""Structured JSON logging with per-run correlation.

Every line emitted while a forecasting run is processed carries the run's
run_id, so a batch can be traced across products and worker threads.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Mapping
from contextvars import ContextVar
from datetime import date, datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

_run_id: ContextVar[str] = ContextVar("run_id", default="")

# Attributes every LogRecord carries; anything else came in through `extra`
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def set_run_id(value: str | None = None) -> str:
    """Set the active run_id (a new UUID if none given) and return it."""
    rid = value or str(uuid.uuid4())
    _run_id.set(rid)
    return rid


def get_run_id() -> str:
    """Run id of the current context ("" outside a run)."""
    return _run_id.get()


def _to_json(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): _to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_json(v) for v in value]
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, extras nested under "extra"."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
            "run_id": get_run_id() or None,
        }

        extra = {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}
        if extra:
            payload["extra"] = _to_json(extra)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def setup_logging(
    level: str | int = "INFO",
    to_stdout: bool = True,
    file_path: str | None = None,
    json_format: bool = True,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Configure the root logger, replacing any handlers already installed.

    Args:
        level: Log level name or number
        to_stdout: Log to stdout
        file_path: Rotating JSON log file (None disables file logging)
        json_format: JSON lines on stdout; plain text otherwise
        max_bytes: File size that triggers rotation
        backup_count: Rotated files kept

    """
    root = logging.getLogger()
    root.setLevel(level if isinstance(level, int) else level.upper())
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if to_stdout:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(JsonFormatter() if json_format else logging.Formatter(PLAIN_FORMAT))
        root.addHandler(stream)

    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            file_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        rotating.setFormatter(JsonFormatter())
        root.addHandler(rotating)


def setup_logging_from_settings(settings) -> None:
    """setup_logging driven by Settings.log_level / log_file / log_json."""
    setup_logging(level=settings.log_level, file_path=settings.log_file, json_format=settings.log_json)


__all__ = [
    "JsonFormatter",
    "get_run_id",
    "set_run_id",
    "setup_logging",
    "setup_logging_from_settings",
]
