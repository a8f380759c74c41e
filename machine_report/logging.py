"""
machine_report.logging
AUTHOR: carter-vin

Structured JSON event logging

Contract:
- One JSON object per line to stderr (stdout carries the report)
- Stable event vocabulary (allowlist)
- UTC timestamps only
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any, Callable, TextIO

# Event types
VALID_EVENT_TYPES = {
    "report_start",
    "collector_failed",
    "args_ignored",
    "report_rendered",
    "report_failed",
    "report_shutdown",
}

EventLogger = Callable[..., None]


def _truncate_message(value: str, *, limit: int = 200) -> str:
    """
    Cap message length to keep events compact
    """
    if len(value) <= limit:
        return value
    return value[:limit] + f"...[truncated {len(value) - limit} chars]"


# Time: current in UTC ISO 8601
def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def emit_event(
    event_type: str,
    *,
    report_version: str,
    stream: TextIO | None = None,
    **fields: Any,
) -> None:
    """
    Emit structured event line

    Rules:
    - event_type in VALID_EVENT_TYPES
    - event_type, report_version, utc_now always present
    - sort_keys + compact separators for format
    """
    if event_type not in VALID_EVENT_TYPES:
        raise ValueError(f"invalid event_type: {event_type}")

    if "message" in fields and isinstance(fields["message"], str):
        # Avoid emitting long strings in event fields
        fields["message"] = _truncate_message(fields["message"])

    payload: dict[str, Any] = {
        "event_type": event_type,
        "utc_now": utc_now_iso(),
        "report_version": report_version,
        **fields,
    }

    print(
        json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False),
        file=stream if stream is not None else sys.stderr,
    )


def event_logger(enabled: bool, *, report_version: str) -> EventLogger:
    """
    Bind the version and return a logger, or a no-op when events are off

    Vocabulary is still enforced when disabled so typos fail in tests.
    """

    def _log(event_type: str, **fields: Any) -> None:
        if not enabled:
            if event_type not in VALID_EVENT_TYPES:
                raise ValueError(f"invalid event_type: {event_type}")
            return
        emit_event(event_type, report_version=report_version, **fields)

    return _log
