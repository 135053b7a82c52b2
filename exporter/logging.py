"""
exporter.logging
AUTHOR: carter-vin

Structured JSON event logging for ops ingestion

Contract:
- One JSON object per line to stdout
- Stable event vocabulary (allowlist)
- UTC timestamps only
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from exporter.collectors.base import CollectorOutcome

# Event types
VALID_EVENT_TYPES = {
    "exporter_start",
    "exporter_listening",
    "scrape_completed",
    "collector_failed",
    "exposition_write_failed",
    "exporter_shutdown",
}


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


def emit_event(event_type: str, *, exporter_version: str, **fields: Any) -> None:
    """
    Emit structured event line to stdout

    Rules:
    - event_type in VALID_EVENT_TYPES
    - event_type, exporter_version, timestamp always present
    - sort_keys + compact separators for format
    """
    if event_type not in VALID_EVENT_TYPES:
        raise ValueError(f"invalid event_type: {event_type}")

    if "message" in fields and isinstance(fields["message"], str):
        fields["message"] = _truncate_message(fields["message"])

    payload: dict[str, Any] = {
        "event_type": event_type,
        "utc_now": utc_now_iso(),
        "exporter_version": exporter_version,
        **fields,
    }

    print(
        json.dumps(
            payload,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        ),
        flush=True,
    )


def emit_collector_failed(outcome: CollectorOutcome, *, exporter_version: str, **fields: Any) -> None:
    """
    Emit collector_failed for a failed CollectorOutcome
    """
    emit_event(
        "collector_failed",
        exporter_version=exporter_version,
        collector=outcome.name,
        error_type=outcome.error_type,
        message=outcome.error_message or "",
        duration_ms=int(outcome.duration_s * 1000),
        **fields,
    )
