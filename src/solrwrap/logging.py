"""
Structured logging for solrwrap with request-id correlation.

Every module logs through ``logging.getLogger(__name__)`` under the
``solrwrap`` hierarchy. This module only decides how those records look:
single-line JSON (default) or plain text, both carrying the request-id bound
to the current thread or async task.

Usage::

    from solrwrap.logging import configure_logging, bind_request_id
    configure_logging()            # JSON to stderr, level from SOLR_LOG_LEVEL or INFO
    bind_request_id("req-abc123")  # subsequent Solr logs carry request_id
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import IO

_request_id_var: ContextVar[str] = ContextVar("solrwrap_request_id", default="")

_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "request_id",
    "message",
}

_TEXT_FORMAT = "%(asctime)s %(levelname)-5s [%(request_id)s] %(name)s - %(message)s"


def bind_request_id(request_id: str | None = None) -> str:
    """Bind *request_id* (or a fresh 12-char hex id) to the current context."""
    rid = request_id or uuid.uuid4().hex[:12]
    _request_id_var.set(rid)
    return rid


def get_request_id() -> str:
    return _request_id_var.get()


class RequestIdFilter(logging.Filter):
    """Copy the bound request-id onto each record as ``record.request_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", ""):
            record.request_id = _request_id_var.get()  # type: ignore[attr-defined]
        return True


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line.

    Fields passed through ``extra={...}`` are merged at the top level, so a
    caller can attach e.g. ``extra={"core": "products"}`` without touching the
    formatter.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = getattr(record, "request_id", "") or _request_id_var.get()
        if rid:
            entry["request_id"] = rid

        entry.update(
            (key, val) for key, val in record.__dict__.items() if key not in _RESERVED_ATTRS
        )

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.environ.get("SOLR_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level {level!r}")
        return resolved
    return level


def configure_logging(
    level: int | str | None = None,
    json_format: bool = True,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach a single handler to the ``solrwrap`` logger and return it.

    Args:
        level: Level number or name. Defaults to ``SOLR_LOG_LEVEL`` or INFO.
        json_format: JSON lines if ``True``, otherwise a text format that
            still shows the request-id.
        stream: Destination stream (default stderr).
    """
    handler = logging.StreamHandler(stream)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT, defaults={"request_id": ""}))
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger("solrwrap")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))
    root.propagate = False
    return root
