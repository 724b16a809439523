"""Derive the next revision identifier from content and lineage.

The digest input is laid out as::

    <len(prev_id) as one byte> <prev_id UTF-8 bytes> <deleted flag byte> <canonical JSON>

The length prefix keeps different ``prev_id``/flag/body splits from producing
the same byte stream.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from doc_revisions.canonical import encode_canonical
from doc_revisions.config import get_settings
from doc_revisions.digest import RevisionDigest, default_digest
from doc_revisions.events import log_structured_event
from doc_revisions.rev_id import format_revision_id, parse_generation
from doc_revisions.types import Failure

_logger = logging.getLogger("doc_revisions.generation")

MAX_PREVIOUS_ID_BYTES = 0xFF


def _reject(failure: Failure, **fields: Any) -> Failure:
    if get_settings().log_rejections:
        log_structured_event(_logger, "revision_id_rejected", reason=failure.reason, **fields)
    return failure


def generate_revision_id(
    json: bytes | None,
    *,
    deleted: bool,
    prev_id: str | None = None,
    digest: RevisionDigest | None = None,
) -> str | Failure:
    """Return ``"<generation + 1>-<hex digest>"`` for the new revision.

    ``json`` is the canonical content (see :func:`encode_canonical`) and may be
    ``None`` for a deletion without a body. An unparseable or oversized
    ``prev_id`` returns a :class:`Failure` and no identifier.
    """
    generation = 0
    prev_bytes = b""
    if prev_id is not None:
        generation = parse_generation(prev_id)
        if generation < 1:
            return _reject(
                Failure("invalid_previous_id", f"invalid previous revision ID '{prev_id}'"),
                prev_id=prev_id,
            )
        prev_bytes = prev_id.encode("utf-8")
        if len(prev_bytes) > MAX_PREVIOUS_ID_BYTES:
            return _reject(
                Failure(
                    "previous_id_too_long",
                    f"previous revision ID is {len(prev_bytes)} bytes, "
                    f"limit is {MAX_PREVIOUS_ID_BYTES}",
                ),
                prev_id_bytes=len(prev_bytes),
            )

    payload = bytearray()
    payload.append(len(prev_bytes))
    payload += prev_bytes
    payload.append(1 if deleted else 0)
    if json is not None:
        payload += json

    primitive = digest if digest is not None else default_digest()
    suffix = primitive(bytes(payload)).hex()
    return format_revision_id(generation + 1, suffix)


def revision_id_for_properties(
    properties: Mapping[str, Any] | None,
    *,
    prev_id: str | None = None,
    deleted: bool | None = None,
    digest: RevisionDigest | None = None,
) -> str | Failure:
    """Canonicalize ``properties`` and derive the next revision identifier.

    When ``deleted`` is omitted only a literal ``"_deleted": true`` marks a
    deletion. ``None`` properties describe a revision without a body.
    """
    if properties is None:
        return generate_revision_id(
            None, deleted=bool(deleted), prev_id=prev_id, digest=digest
        )
    if deleted is None:
        deleted = properties.get("_deleted") is True
    encoded = encode_canonical(properties)
    if isinstance(encoded, Failure):
        return encoded
    return generate_revision_id(encoded, deleted=deleted, prev_id=prev_id, digest=digest)
