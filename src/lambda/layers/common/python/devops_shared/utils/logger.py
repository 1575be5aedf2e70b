"""Lightweight JSON logger utility for the DevOps event Lambda.

Emits one JSON object per line with environment and correlation_id fields
when available. Verbosity follows the DEBUG/INFO environment toggles.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional


def _env_flag(name: str, default: str = "") -> bool:
    return (os.environ.get(name, default) or "").strip().lower() == "true"


def resolve_log_level() -> int:
    """Map DEBUG/INFO toggles to a logging level (DEBUG defaults to true)."""
    if _env_flag("DEBUG", "true"):
        return logging.DEBUG
    if _env_flag("INFO"):
        return logging.INFO
    return logging.WARNING


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {}
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            payload.update(context)
        payload.update(
            {
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
        )
        env = getattr(record, "environment", None) or os.environ.get("ENVIRONMENT")
        if env:
            payload["environment"] = env
        corr = getattr(record, "correlation_id", None)
        if corr:
            payload["correlation_id"] = corr
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if not hasattr(record, "asctime"):
            payload["timestamp"] = record.created
        return json.dumps(payload, ensure_ascii=False, default=str)


class _Adapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Dict[str, Any]):  # type: ignore[override]
        extra = self.extra.copy() if isinstance(self.extra, dict) else {}
        if "extra" in kwargs and isinstance(kwargs["extra"], dict):
            extra.update(kwargs["extra"])  # merge per-call extras
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(name: str, correlation_id: Optional[str] = None) -> logging.LoggerAdapter:
    """Return a JSON-formatted logger adapter with optional correlation_id."""
    base = logging.getLogger(name)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        base.addHandler(handler)
    base.setLevel(resolve_log_level())
    extras = {"environment": os.environ.get("ENVIRONMENT")}
    if correlation_id:
        extras["correlation_id"] = correlation_id
    return _Adapter(base, extras)


def extract_correlation_id(event: Optional[Dict[str, Any]]) -> Optional[str]:
    """Try to extract a correlation id from an SNS invocation event."""
    if not isinstance(event, dict):
        return None
    for key in ("correlation_id", "CorrelationId", "request_id"):
        val = event.get(key)
        if isinstance(val, str) and val:
            return val
    records = event.get("Records")
    if isinstance(records, list) and records:
        first = records[0] if isinstance(records[0], dict) else {}
        sns = first.get("Sns")
        if isinstance(sns, dict):
            message_id = sns.get("MessageId")
            if isinstance(message_id, str) and message_id:
                return message_id
    return None
