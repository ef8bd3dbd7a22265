from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping, MutableMapping
from uuid import uuid4

from study_diagnostic.core.config import get_settings


_CORRELATION_ID: ContextVar[str | None] = ContextVar("diagnostic_correlation_id", default=None)


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        correlation_id = _CORRELATION_ID.get()
        if correlation_id:
            payload["correlation_id"] = correlation_id
        structured = getattr(record, "structured_data", None)
        if isinstance(structured, Mapping):
            payload.update(structured)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class StructuredAdapter(logging.LoggerAdapter):
    """Adapter that folds adapter defaults and ``structured_data`` extras together."""

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        merged: Dict[str, Any] = dict(self.extra or {})
        extra = kwargs.get("extra")
        if isinstance(extra, dict):
            structured = extra.get("structured_data")
            if isinstance(structured, Mapping):
                merged.update(structured)
        else:
            extra = {}
        extra["structured_data"] = merged
        kwargs["extra"] = extra
        return msg, kwargs


_STRUCTURED_ATTR = "_diagnostic_structured_configured"


def configure_logging(*, level: int | str | None = None, environment: str | None = None) -> None:
    """Install the JSON handler on the root logger once.

    ``level`` and ``environment`` default to ``LOG_LEVEL`` and
    ``ENVIRONMENT`` from settings. Library modules never call this; it is
    meant for the embedding application (CLI, web layer, notebook). ``dev``
    and ``test`` bump an INFO level to DEBUG; ``prod`` never goes below INFO.
    """
    root = logging.getLogger()
    if getattr(root, _STRUCTURED_ATTR, False):
        return

    settings = get_settings()
    if level is None:
        level = settings.log_level
    if environment is None:
        environment = settings.environment

    resolved = logging.getLevelName(level) if isinstance(level, str) else level
    if not isinstance(resolved, int):
        resolved = logging.INFO
    if environment in ("dev", "test"):
        effective_level = logging.DEBUG if resolved == logging.INFO else resolved
    elif environment == "prod":
        effective_level = max(resolved, logging.INFO)
    else:
        effective_level = resolved

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(effective_level)
    setattr(root, _STRUCTURED_ATTR, True)


def get_logger(name: str, **defaults: Any) -> StructuredAdapter:
    """Return a structured adapter that injects ``defaults`` into every record."""

    return StructuredAdapter(logging.getLogger(name), defaults)


def get_correlation_id() -> str | None:
    return _CORRELATION_ID.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id (generated when omitted) for the enclosed block."""

    cid = correlation_id or str(uuid4())
    token = _CORRELATION_ID.set(cid)
    try:
        yield cid
    finally:
        _CORRELATION_ID.reset(token)


__all__ = [
    "JsonFormatter",
    "StructuredAdapter",
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "correlation_context",
]
