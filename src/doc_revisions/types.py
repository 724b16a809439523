"""Typed results shared by the revision helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FailureReason = Literal[
    "invalid_reserved_key",
    "serialization_error",
    "invalid_previous_id",
    "previous_id_too_long",
    "missing_content",
]


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    detail: str = ""
