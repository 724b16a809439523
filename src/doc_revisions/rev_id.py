"""Parse and format ``<generation>-<suffix>`` revision identifiers.

Malformed identifiers never raise: the generation falls back to ``-1`` and the
suffix to ``None`` so callers can check for the sentinel explicitly.
"""

from __future__ import annotations

import re

UNPARSEABLE_GENERATION = -1

_GENERATION = re.compile(r"\+?[0-9]+")


def parse_generation(rev_id: str) -> int:
    """Return the generation prefix of ``rev_id`` or ``-1`` when unparseable."""
    prefix, sep, _ = rev_id.partition("-")
    if not sep or _GENERATION.fullmatch(prefix) is None:
        return UNPARSEABLE_GENERATION
    return int(prefix)


def parse_suffix(rev_id: str) -> str | None:
    """Return the text after the first ``-``, or ``None`` if there is no ``-``."""
    _, sep, suffix = rev_id.partition("-")
    if not sep:
        return None
    return suffix


def split_revision_id(rev_id: str) -> tuple[int, str | None]:
    return parse_generation(rev_id), parse_suffix(rev_id)


def format_revision_id(generation: int, suffix: str) -> str:
    return f"{generation}-{suffix}"
