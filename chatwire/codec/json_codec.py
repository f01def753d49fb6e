"""Extension-preserving JSON codec.

Purpose
-------
Decode bytes into a typed record while keeping every unknown key, and encode
a record back to bytes with its stored extensions merged in.

Decode
    1. Parse the bytes into a generic map (``MalformedPayloadError`` on bad
       JSON or a non-object payload).
    2. Validate the map into the target's known fields
       (``MalformedPayloadError`` when a known field has the wrong shape).
       Each record in the tree splits its own unknown keys into its
       extension store during validation.
    3. Keep the exact input as the top-level record's ``raw_bytes``.

Encode
    1. Run the record tree's encode-time checks.
    2. Serialize the record's plain-data view (nested records carry their own
       extensions).
    3. Return that unchanged when there are no extensions; otherwise overlay
       the extensions (extension values win on collision) and re-serialize.

Notes
-----
This module never imports the streaming layer or any transport library.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Type, TypeVar, Union

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..base.errors import EncodeError, MalformedPayloadError
from .extensions import DECODE_CONTEXT_KEY, PLAIN_VIEW_KEY, compact_json, merge_extensions

if TYPE_CHECKING:  # pragma: no cover
    from .extensible_model import ExtensibleModel

R = TypeVar("R", bound="ExtensibleModel")

Payload = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: Payload) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _parse(data: Payload) -> Any:
    if isinstance(data, memoryview):
        data = data.tobytes()
    try:
        return json.loads(data)
    except ValueError as exc:
        raise MalformedPayloadError(f"payload is not valid JSON: {exc}", raw=exc) from exc


def decode_mapping_with_extensions(fields: Mapping[str, Any], target: Type[R]) -> R:
    """Validate an already-parsed JSON object into ``target``.

    Unknown keys of every record in the tree land in that record's extension
    store.
    """
    if not isinstance(fields, Mapping):
        raise MalformedPayloadError(f"expected a JSON object for {target.__name__}, got {type(fields).__name__}")
    try:
        return target.model_validate(fields, context={DECODE_CONTEXT_KEY: True})
    except ValidationError as exc:
        raise MalformedPayloadError(
            f"payload does not match {target.__name__}: {exc.error_count()} invalid field(s)",
            raw=exc,
        ) from exc


def decode_with_extensions(data: Payload, target: Type[R]) -> R:
    """Decode JSON bytes into ``target`` keeping unknown fields.

    Raises:
        MalformedPayloadError: malformed JSON, a non-object payload, or a
            known field of the wrong shape.
    """
    parsed = _parse(data)
    if not isinstance(parsed, dict):
        raise MalformedPayloadError(
            f"expected a JSON object for {target.__name__}, got {type(parsed).__name__}"
        )
    record = decode_mapping_with_extensions(parsed, target)
    record.extensions.raw_bytes = _as_bytes(data)
    return record


def decode_array_with_extensions(data: Payload, target: Type[R]) -> List[R]:
    """Decode a JSON array whose elements are objects of type ``target``."""
    parsed = _parse(data)
    if not isinstance(parsed, list):
        raise MalformedPayloadError(f"expected a JSON array, got {type(parsed).__name__}")
    records: List[R] = []
    for idx, item in enumerate(parsed):
        if not isinstance(item, dict):
            raise MalformedPayloadError(f"array element {idx} is not a JSON object")
        records.append(decode_mapping_with_extensions(item, target))
    return records


def encode_with_extensions(record: "ExtensibleModel", extension_fields: Mapping[str, Any]) -> bytes:
    """Serialize ``record`` and overlay ``extension_fields``.

    Raises:
        ContentFieldsConflictError: a message in the tree sets both content
            forms.
        EncodeError: the record or an extension value cannot be serialized.
    """
    record.validate_for_encode()
    try:
        base = record.model_dump_json(context={PLAIN_VIEW_KEY: record})
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodeError(f"cannot serialize {type(record).__name__}: {exc}", raw=exc) from exc
    if not extension_fields:
        return base.encode("utf-8")
    try:
        return compact_json(merge_extensions(json.loads(base), extension_fields))
    except (TypeError, ValueError) as exc:
        raise EncodeError(
            f"cannot serialize extensions of {type(record).__name__}: {exc}", raw=exc
        ) from exc


def encode_array_with_extensions(records: Iterable["ExtensibleModel"]) -> bytes:
    """Serialize records as a compact JSON array, each with its extensions."""
    return b"[" + b",".join(encode_with_extensions(r, r.extensions.fields) for r in records) + b"]"


__all__ = [
    "decode_with_extensions",
    "decode_mapping_with_extensions",
    "decode_array_with_extensions",
    "encode_with_extensions",
    "encode_array_with_extensions",
]
