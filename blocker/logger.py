"""
Logging for the HTB Blocker.

Every per-address outcome is one line on stdout so operators can read the
output of a cron run directly, or ship it to a SIEM.

Two formats:
- text (default): 2025-01-30T10:15:23.123Z WARN Skipping invalid address raw='x'
- json: one JSON object per line (Splunk, ELK, etc.)
"""

import json
import sys
from datetime import datetime, timezone
from typing import TextIO

LOG_STREAM: TextIO = sys.stdout
LOG_FORMAT = "text"


def configure(fmt: str = None, stream: TextIO = None) -> None:
    """Select output format ("text" or "json") and/or stream."""
    global LOG_FORMAT, LOG_STREAM
    if fmt is not None:
        if fmt not in ("text", "json"):
            raise ValueError(f"Unknown log format: {fmt!r}")
        LOG_FORMAT = fmt
    if stream is not None:
        LOG_STREAM = stream


def _timestamp_iso() -> str:
    """Current UTC time in ISO format for log entries."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def _format_text(event: dict) -> str:
    context = " ".join(
        f"{k}={v!r}" if isinstance(v, str) else f"{k}={v}"
        for k, v in event.items()
        if k not in ("timestamp", "level", "message")
    )
    line = f"{event['timestamp']} {event['level']:<5} {event['message']}"
    return f"{line} {context}" if context else line


def log_event(level: str, message: str, **kwargs) -> None:
    """
    Write a single log event as one line.

    Args:
        level: INFO, WARN, ERROR.
        message: Human-readable description.
        **kwargs: Context (e.g. ip, attempt, timeout, list).
    """
    event = {
        "timestamp": _timestamp_iso(),
        "level": level,
        "message": message,
        **kwargs,
    }
    if LOG_FORMAT == "json":
        line = json.dumps(event, default=str)
    else:
        line = _format_text(event)
    LOG_STREAM.write(line + "\n")
    LOG_STREAM.flush()


def log_info(message: str, **kwargs) -> None:
    log_event("INFO", message, **kwargs)


def log_warn(message: str, **kwargs) -> None:
    log_event("WARN", message, **kwargs)


def log_error(message: str, **kwargs) -> None:
    log_event("ERROR", message, **kwargs)
