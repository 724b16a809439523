"""Canonical JSON encoding of document properties for revision hashing.

Only content-relevant properties are encoded. Metadata keys such as ``_id`` and
``_rev`` are dropped, ``_attachments`` and ``_removed`` are kept, and any other
top-level key starting with ``_`` rejects the whole document. Map entries are
sorted by key at every level so equal documents always encode to equal bytes.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from doc_revisions.config import get_settings
from doc_revisions.events import log_structured_event
from doc_revisions.types import Failure

_logger = logging.getLogger("doc_revisions.canonical")

RESERVED_PREFIX = "_"
SPECIAL_KEYS_TO_REMOVE = frozenset(
    {
        "_id",
        "_rev",
        "_deleted",
        "_revisions",
        "_revs_info",
        "_conflicts",
        "_deleted_conflicts",
        "_local_seq",
    }
)
SPECIAL_KEYS_TO_LEAVE = frozenset({"_attachments", "_removed"})


def _reject(failure: Failure, **fields: Any) -> Failure:
    if get_settings().log_rejections:
        log_structured_event(_logger, "canonical_encoding_rejected", reason=failure.reason, **fields)
    return failure


def filter_content_properties(properties: Mapping[str, Any]) -> dict[str, Any] | Failure:
    """Return the properties that take part in the revision hash."""
    kept: dict[str, Any] = {}
    for key, value in properties.items():
        if not isinstance(key, str):
            return _reject(
                Failure("invalid_reserved_key", f"non-string top-level key {key!r}"),
                key=repr(key),
            )
        if not key.startswith(RESERVED_PREFIX) or key in SPECIAL_KEYS_TO_LEAVE:
            kept[key] = value
        elif key in SPECIAL_KEYS_TO_REMOVE:
            continue
        else:
            return _reject(
                Failure("invalid_reserved_key", f"invalid top-level key '{key}'"),
                key=key,
            )
    return kept


def encode_canonical(properties: Mapping[str, Any] | None) -> bytes | Failure:
    """Encode ``properties`` as deterministic UTF-8 JSON, or return a failure."""
    if properties is None:
        return Failure("missing_content", "no properties to encode")

    kept = filter_content_properties(properties)
    if isinstance(kept, Failure):
        return kept

    try:
        serialized = json.dumps(
            kept,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        return serialized.encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        return _reject(Failure("serialization_error", str(exc)), error=str(exc))


def canonical_json(properties: Mapping[str, Any] | None) -> bytes | None:
    """Nullable form of :func:`encode_canonical`."""
    encoded = encode_canonical(properties)
    if isinstance(encoded, Failure):
        return None
    return encoded
