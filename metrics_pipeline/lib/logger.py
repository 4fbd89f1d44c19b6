"""Pipeline-wide logging configuration and the diagnostic file sink."""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

_DEFAULT_LEVEL = logging.INFO

_RESERVED_ATTRS = {
    "args",
    "exc_info",
    "exc_text",
    "message",
    "msg",
    "levelno",
    "levelname",
    "name",
    "pathname",
    "filename",
    "module",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "stack_info",
    "taskName",
}

DIAGNOSTIC_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DIAGNOSTIC_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Render log records as JSON for easier ingestion."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Merge extra properties if they are simple types
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = repr(value)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


class DiagnosticFileHandler(logging.FileHandler):
    """Append-only text sink producing ``<timestamp> [LEVEL] message`` lines.

    The sink is best-effort: any failure to open or write the file is dropped
    so that metric producers and the collection path never observe it.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__(path, mode="a", encoding="utf-8", delay=True)
        self.setFormatter(logging.Formatter(DIAGNOSTIC_FORMAT, datefmt=DIAGNOSTIC_DATEFMT))

    def emit(self, record: logging.LogRecord) -> None:
        # FileHandler opens the stream outside its own error handling.
        try:
            super().emit(record)
        except Exception:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802 - logging API
        return None


def configure_logging(level: int | str | None = None, diagnostic_path: Path | str | None = None) -> None:
    """Configure root logger with JSON console output and an optional diagnostic file."""

    root = logging.getLogger()
    if not getattr(root, "_structured_configured", False):  # type: ignore[attr-defined]
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(_DEFAULT_LEVEL)
        root._structured_configured = True  # type: ignore[attr-defined]

    if level is not None:
        root.setLevel(level)

    if diagnostic_path is not None:
        attach_diagnostic_sink(root, diagnostic_path)


def attach_diagnostic_sink(logger: logging.Logger, path: Path | str) -> DiagnosticFileHandler:
    """Attach a diagnostic file handler for ``path`` unless one is already attached."""

    target = os.path.abspath(path)
    for existing in logger.handlers:
        if isinstance(existing, DiagnosticFileHandler) and existing.baseFilename == target:
            return existing
    handler = DiagnosticFileHandler(target)
    logger.addHandler(handler)
    return handler


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
