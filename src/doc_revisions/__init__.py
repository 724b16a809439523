"""Content-derived revision identifiers for multi-version documents."""

from doc_revisions.canonical import canonical_json, encode_canonical
from doc_revisions.generation import generate_revision_id, revision_id_for_properties
from doc_revisions.history import (
    ContiguousHistory,
    InvalidHistoryPayload,
    LiteralHistory,
    compact_history,
    expand_history,
    history_from_dict,
    history_to_dict,
)
from doc_revisions.rev_id import format_revision_id, parse_generation, parse_suffix
from doc_revisions.types import Failure

__all__ = [
    "ContiguousHistory",
    "Failure",
    "InvalidHistoryPayload",
    "LiteralHistory",
    "canonical_json",
    "compact_history",
    "encode_canonical",
    "expand_history",
    "format_revision_id",
    "generate_revision_id",
    "history_from_dict",
    "history_to_dict",
    "parse_generation",
    "parse_suffix",
    "revision_id_for_properties",
]
