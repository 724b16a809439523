"""Pluggable digest primitives used to derive revision suffixes."""

from __future__ import annotations

import hashlib
from typing import Protocol

from doc_revisions.config import check_digest_algorithm, get_settings


class RevisionDigest(Protocol):
    def __call__(self, data: bytes) -> bytes:
        """Return the fixed-width digest of ``data``."""


def md5_digest(data: bytes) -> bytes:
    """Default primitive. Consistency matters here, not collision resistance."""
    return hashlib.md5(data, usedforsecurity=False).digest()


def hashlib_digest(name: str) -> RevisionDigest:
    """Return a digest function backed by the named ``hashlib`` algorithm."""
    algorithm = check_digest_algorithm(name)
    if algorithm == "md5":
        return md5_digest

    def _digest(data: bytes) -> bytes:
        return hashlib.new(algorithm, data).digest()

    return _digest


def default_digest() -> RevisionDigest:
    return hashlib_digest(get_settings().digest_algorithm)
