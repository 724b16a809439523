"""Compact encoding of revision ancestor chains for sync negotiation.

A chain whose generations descend by exactly one from the first entry is sent
as ``{"start": N, "ids": [suffix, ...]}``; anything else is sent verbatim as
``{"ids": [rev_id, ...]}``. Compaction is all-or-nothing: the first break
abandons it for the whole chain.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from doc_revisions.rev_id import format_revision_id, parse_generation, parse_suffix


class InvalidHistoryPayload(ValueError):
    """Raised when an inbound history payload does not match either wire shape."""


@dataclass(frozen=True)
class ContiguousHistory:
    start: int
    suffixes: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "ids": list(self.suffixes)}


@dataclass(frozen=True)
class LiteralHistory:
    ids: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"ids": list(self.ids)}


CompactHistory = ContiguousHistory | LiteralHistory


class _HistoryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    start: StrictInt | None = None
    ids: list[StrictStr]


def _contiguous_suffixes(history: Sequence[str]) -> tuple[int, list[str]] | None:
    start = -1
    last_generation = -1
    suffixes: list[str] = []
    for rev_id in history:
        generation = parse_generation(rev_id)
        suffix = parse_suffix(rev_id)
        if generation <= 0 or not suffix:
            return None
        if start < 0:
            start = generation
        elif generation != last_generation - 1:
            return None
        last_generation = generation
        suffixes.append(suffix)
    return start, suffixes


def compact_history(history: Sequence[str] | None) -> CompactHistory | None:
    """Return the compact form of ``history`` (newest first), or ``None`` if empty."""
    if not history:
        return None
    run = _contiguous_suffixes(history)
    if run is None:
        return LiteralHistory(ids=tuple(history))
    start, suffixes = run
    return ContiguousHistory(start=start, suffixes=tuple(suffixes))


def history_to_dict(history: Sequence[str] | None) -> dict[str, Any] | None:
    compact = compact_history(history)
    if compact is None:
        return None
    return compact.to_dict()


def history_from_dict(payload: Mapping[str, Any]) -> CompactHistory:
    """Parse a ``{start, ids}`` or ``{ids}`` payload received from a peer."""
    try:
        parsed = _HistoryPayload.model_validate(payload)
    except ValidationError as exc:
        raise InvalidHistoryPayload(f"Invalid revision history payload: {exc}") from exc

    if parsed.start is None:
        return LiteralHistory(ids=tuple(parsed.ids))
    if not parsed.ids:
        raise InvalidHistoryPayload("Invalid revision history payload: start without ids")
    if parsed.start < len(parsed.ids):
        raise InvalidHistoryPayload(
            f"Invalid revision history payload: start {parsed.start} "
            f"cannot cover {len(parsed.ids)} ids"
        )
    if any(not suffix for suffix in parsed.ids):
        raise InvalidHistoryPayload("Invalid revision history payload: empty suffix")
    return ContiguousHistory(start=parsed.start, suffixes=tuple(parsed.ids))


def expand_history(history: CompactHistory) -> list[str]:
    """Return the full revision IDs described by ``history``, newest first."""
    if isinstance(history, LiteralHistory):
        return list(history.ids)
    return [
        format_revision_id(history.start - index, suffix)
        for index, suffix in enumerate(history.suffixes)
    ]
