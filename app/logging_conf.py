"""Logging configuration for the probe servers and the smoke runner.

Every record is emitted as one JSON object per line on stdout, tagged with
the service name. setup_logging() is idempotent so tests and uvicorn reloads
don't stack handlers.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_DEFAULT_SERVICE = os.getenv("SERVICE_NAME", "hello-probe")

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED = frozenset(vars(LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
    "color_message",  # uvicorn's ANSI duplicate of the message
}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Core keys are ts/level/logger/service/message; structured fields passed
    with `extra={...}` are merged in without overwriting the core keys.
    """

    def __init__(self, service: str = _DEFAULT_SERVICE) -> None:
        super().__init__()
        self.service = service

    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED or key in payload:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _make_stream_handler(level: int, service: str) -> Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter(service=service))
    return handler


def _normalize_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: str | int = _DEFAULT_LEVEL, *, service: str = _DEFAULT_SERVICE) -> None:
    """Configure root and uvicorn loggers for JSON output.

    Only the first call attaches a handler; later calls just adjust the level.
    """
    level = _normalize_level(level)
    root = logging.getLogger()
    root.setLevel(level)

    if not root.handlers:
        root.addHandler(_make_stream_handler(level, service))

    # uvicorn ships its own handlers; strip them so records reach the root JSON handler.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = True
        for h in list(lg.handlers):
            lg.removeHandler(h)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a named logger, defaulting to this module's name."""
    return logging.getLogger(name if name else __name__)
