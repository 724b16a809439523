import json
import logging

import pytest

from doc_revisions.canonical import (
    SPECIAL_KEYS_TO_LEAVE,
    SPECIAL_KEYS_TO_REMOVE,
    canonical_json,
    encode_canonical,
    filter_content_properties,
)
from doc_revisions.types import Failure


def test_encoding_is_independent_of_insertion_order() -> None:
    first = {"title": "Report", "tags": ["b", "a"], "meta": {"z": 1, "a": 2}}
    second = {"meta": {"a": 2, "z": 1}, "tags": ["b", "a"], "title": "Report"}

    assert encode_canonical(first) == encode_canonical(second)


def test_encoding_sorts_nested_keys_and_keeps_array_order() -> None:
    encoded = encode_canonical({"b": [3, 1, 2], "a": {"y": None, "x": True}})

    assert encoded == b'{"a":{"x":true,"y":null},"b":[3,1,2]}'


def test_non_ascii_text_is_emitted_as_utf8() -> None:
    assert encode_canonical({"name": "café"}) == '{"name":"café"}'.encode()


def test_removed_keys_do_not_affect_encoding() -> None:
    body = {"title": "Report", "count": 3}
    with_metadata = {**body, "_id": "doc-1", "_rev": "2-abc", "_deleted": False}

    assert encode_canonical(with_metadata) == encode_canonical(body)


@pytest.mark.parametrize("key", sorted(SPECIAL_KEYS_TO_REMOVE))
def test_every_metadata_key_is_dropped(key: str) -> None:
    assert encode_canonical({"a": 1, key: "x"}) == b'{"a":1}'


@pytest.mark.parametrize("key", sorted(SPECIAL_KEYS_TO_LEAVE))
def test_content_reserved_keys_are_kept(key: str) -> None:
    encoded = encode_canonical({"a": 1, key: {"file.txt": {"digest": "md5-x"}}})

    assert isinstance(encoded, bytes)
    assert key in json.loads(encoded)


def test_attachments_change_the_encoding() -> None:
    plain = encode_canonical({"a": 1})
    with_attachment = encode_canonical({"a": 1, "_attachments": {"f": {"length": 3}}})

    assert plain != with_attachment


@pytest.mark.parametrize(
    "properties",
    [
        {"_bogus": 1},
        {"title": "Report", "_bogus": 1},
        {"_id": "doc-1", "_attachments": {}, "_Rev": "1-a"},
    ],
)
def test_unknown_reserved_key_rejects_document(properties: dict) -> None:
    result = encode_canonical(properties)

    assert isinstance(result, Failure)
    assert result.reason == "invalid_reserved_key"
    assert canonical_json(properties) is None


def test_underscore_keys_below_top_level_are_plain_content() -> None:
    assert encode_canonical({"meta": {"_private": 1}}) == b'{"meta":{"_private":1}}'


def test_non_string_top_level_key_is_rejected() -> None:
    result = filter_content_properties({1: "one"})

    assert isinstance(result, Failure)
    assert result.reason == "invalid_reserved_key"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), object(), {1, 2}])
def test_unserializable_values_fail(value: object) -> None:
    result = encode_canonical({"value": value})

    assert isinstance(result, Failure)
    assert result.reason == "serialization_error"
    assert canonical_json({"value": value}) is None


def test_missing_properties_have_no_encoding() -> None:
    assert encode_canonical(None) == Failure("missing_content", "no properties to encode")
    assert canonical_json(None) is None


def test_empty_document_encodes_to_empty_object() -> None:
    assert canonical_json({"_id": "doc-1"}) == b"{}"


def test_rejection_is_logged_as_structured_event(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="doc_revisions.canonical"):
        encode_canonical({"_bogus": 1})

    event = json.loads(caplog.records[-1].getMessage())
    assert event == {
        "event_type": "canonical_encoding_rejected",
        "key": "_bogus",
        "reason": "invalid_reserved_key",
    }


def test_rejection_logging_can_be_disabled(monkeypatch, caplog) -> None:
    monkeypatch.setenv("DOC_REVISIONS_LOG_REJECTIONS", "false")

    with caplog.at_level(logging.WARNING, logger="doc_revisions.canonical"):
        result = encode_canonical({"_bogus": 1})

    assert isinstance(result, Failure)
    assert caplog.records == []
