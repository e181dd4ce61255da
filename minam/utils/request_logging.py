"""Shared helpers for logging incoming HTTP requests."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional


def log_request(
    logger,
    method: str,
    path: str,
    query: Optional[Mapping[str, Any]] = None,
    body: Any = None,
) -> None:
    """Emit a structured log line for the current HTTP request."""
    logger.info(
        "HTTP request method=%s path=%s query=%s body=%s",
        method or "<unknown>",
        path,
        dict(query or {}),
        _body_preview(body),
    )


def _body_preview(body: Any) -> str:
    if body is None:
        return "<none>"
    if isinstance(body, (bytes, bytearray)):
        if not body:
            return "<empty>"
        try:
            decoded = bytes(body).decode("utf-8")
        except UnicodeDecodeError:
            return "<binary>"
        return _truncate(decoded)
    if isinstance(body, str):
        return _truncate(body)
    try:
        serialized = json.dumps(body)
    except (TypeError, ValueError):
        serialized = str(body)
    return _truncate(serialized)


def _truncate(value: str, *, limit: int = 2048) -> str:
    if len(value) <= limit:
        return value
    return f"{value[:limit]}...<truncated>"
