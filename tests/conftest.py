from __future__ import annotations

import os

import pytest

# Pin the digest so golden revision IDs do not depend on the caller's environment.
os.environ.setdefault("DOC_REVISIONS_DIGEST_ALGORITHM", "md5")

from doc_revisions.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
