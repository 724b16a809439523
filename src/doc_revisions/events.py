"""Structured logging helper for rejected revision inputs."""

from __future__ import annotations

import json
import logging
from typing import Any


def log_structured_event(
    logger: logging.Logger, event_type: str, *, level: int = logging.WARNING, **fields: Any
) -> str:
    payload = {"event_type": event_type, **fields}
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    logger.log(level, serialized)
    return serialized
