"""JSON logger utility for compilation runs.

Emits structured logs with stage and construct fields when available.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        stage = getattr(record, "stage", None) or os.environ.get("STAGE")
        if stage:
            payload["stage"] = stage
        construct = getattr(record, "construct", None)
        if construct:
            payload["construct"] = construct
        details = getattr(record, "details", None)
        if isinstance(details, dict):
            payload.update(details)
        payload["timestamp"] = record.created
        return json.dumps(payload, ensure_ascii=False, default=str)


class _Adapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Dict[str, Any]):  # type: ignore[override]
        extra = self.extra.copy() if isinstance(self.extra, dict) else {}
        if "extra" in kwargs and isinstance(kwargs["extra"], dict):
            extra.update(kwargs["extra"])  # merge per-call extras
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str, stage: Optional[str] = None, construct: Optional[str] = None) -> logging.LoggerAdapter:
    """Return a JSON-formatted logger adapter bound to a stage and construct."""
    base = logging.getLogger(name)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        base.addHandler(handler)
    base.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
    extras: Dict[str, Any] = {"stage": stage or os.environ.get("STAGE")}
    if construct:
        extras["construct"] = construct
    return _Adapter(base, extras)
