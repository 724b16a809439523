"""Print the canonical encoding and next revision ID for a JSON document."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))
from doc_revisions.canonical import encode_canonical
from doc_revisions.config import get_settings, validate_settings
from doc_revisions.generation import generate_revision_id
from doc_revisions.types import Failure


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("document", help="Path to a JSON file holding the document properties.")
    parser.add_argument(
        "--prev-id",
        default=None,
        help="Revision ID of the parent revision; omit for a new document.",
    )
    parser.add_argument(
        "--deleted",
        action="store_true",
        help="Mark the new revision as a deletion.",
    )
    args = parser.parse_args(argv)

    validate_settings(get_settings())
    properties = json.loads(Path(args.document).read_text(encoding="utf-8"))
    if not isinstance(properties, dict):
        print("Document must be a JSON object.")
        return 2

    encoded = encode_canonical(properties)
    if isinstance(encoded, Failure):
        print(f"Cannot encode document: {encoded.reason}: {encoded.detail}")
        return 1

    rev_id = generate_revision_id(
        encoded,
        deleted=args.deleted or properties.get("_deleted") is True,
        prev_id=args.prev_id,
    )
    if isinstance(rev_id, Failure):
        print(f"Cannot generate revision ID: {rev_id.reason}: {rev_id.detail}")
        return 1

    print(json.dumps({"canonical": encoded.decode("utf-8"), "rev": rev_id}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
