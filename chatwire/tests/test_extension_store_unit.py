"""Unit tests for the extension store and the split/merge helpers."""

from __future__ import annotations

import json

from chatwire.codec import ExtensionStore, merge_extensions, split_extensions


def test_split_extensions_keeps_only_unknown_keys():
    payload = {"role": "user", "content": "hi", "x_vendor": {"a": 1}}
    ext = split_extensions(payload, {"role", "content"})
    assert ext == {"x_vendor": {"a": 1}}  # nosec B101 - pytest assert in tests


def test_merge_extensions_extension_value_wins():
    merged = merge_extensions({"content": "schema"}, {"content": "extension", "extra": 1})
    assert merged == {"content": "extension", "extra": 1}  # nosec B101


def test_populate_records_raw_and_extension_bytes():
    store = ExtensionStore()
    store.populate({"a": 1, "b": "two"}, {"a"})
    assert store.fields == {"b": "two"}  # nosec B101
    assert json.loads(store.extension_raw_bytes) == {"b": "two"}  # nosec B101
    assert json.loads(store.raw_bytes) == {"a": 1, "b": "two"}  # nosec B101


def test_populate_without_extensions_leaves_extension_bytes_empty():
    store = ExtensionStore()
    store.populate({"a": 1}, {"a"})
    assert store.fields == {}  # nosec B101
    assert store.extension_raw_bytes == b""  # nosec B101


def test_populate_logs_and_continues_when_extensions_cannot_be_serialized(log_capture):
    store = ExtensionStore()
    store.populate({"a": 1, "bad": object()}, {"a"}, owner="Thing")
    assert "bad" in store.fields  # nosec B101
    assert store.extension_raw_bytes == b""  # nosec B101
    payload = log_capture.first("codec.extension_encode_failed")
    assert payload["kind"] == "extension_encode_failure"  # nosec B101
    assert payload["record"] == "Thing"  # nosec B101


def test_equality_ignores_raw_bytes():
    a = ExtensionStore(fields={"k": 1}, raw_bytes=b"one")
    b = ExtensionStore(fields={"k": 1}, raw_bytes=b"two")
    assert a == b  # nosec B101
    b.set("k", 2)
    assert a != b  # nosec B101
    assert b.get("k") == 2 and b.has("k") and not b.has("missing")  # nosec B101
    assert b.get("missing", "dflt") == "dflt"  # nosec B101
