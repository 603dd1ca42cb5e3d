"""
Structured logging helpers for riffwave.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class LogFormat(str, Enum):
    HUMAN = "human"
    JSON = "json"


def _summarise_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<{len(value)} bytes>"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class EventLogger:
    """Wrapper that emits structured events in human or JSON format."""

    def __init__(self, logger: logging.Logger, log_format: LogFormat = LogFormat.HUMAN) -> None:
        self.logger = logger
        self.log_format = log_format

    def log(self, event_type: str, *, level: str = "info", **fields: Any) -> None:
        timestamp = datetime.now(timezone.utc).isoformat()
        summarised = {key: _summarise_value(value) for key, value in fields.items()}
        log_method = getattr(self.logger, level, self.logger.info)

        if self.log_format == LogFormat.JSON:
            payload = {
                "timestamp": timestamp,
                "event": event_type,
                "fields": summarised,
            }
            log_method(json.dumps(payload, separators=(",", ":")))
            return

        field_blob = " ".join(f"{key}={summarised[key]}" for key in sorted(summarised))
        message = f"[{event_type}] {timestamp}"
        if field_blob:
            message = f"{message} | {field_blob}"
        log_method(message)


def create_event_logger(logger: logging.Logger, fmt: str | LogFormat) -> EventLogger:
    try:
        log_format = LogFormat(fmt)
    except ValueError:
        log_format = LogFormat.HUMAN
    return EventLogger(logger, log_format)
