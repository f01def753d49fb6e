"""
Pydantic base class for records that keep unknown wire fields.

Purpose
-------
Every schema-bearing wire record derives from :class:`ExtensibleModel`. The
base class owns one :class:`ExtensionStore` per instance and hooks pydantic's
validation and serialization so that:

- decoding (``from_json``/``from_dict`` or the codec functions) splits the
  payload into schema fields and extension fields at every nesting level;
- serializing merges a record's extensions into its schema fields, except
  when the codec asks for the record's plain-data view.

Encoding rules
--------------
``wire_omit_empty``
    Field names dropped from output when their value is empty (``None``,
    ``""``, ``0``, ``False``, ``[]``, ``{}``).
``wire_omit_none``
    Field names dropped from output only when ``None`` (optional
    sub-objects).

Subclasses adjust the wire shape with ``_from_wire`` (incoming payload) and
``_to_wire`` (outgoing map) and add encode-time checks by overriding
``validate_for_encode``.

Notes
-----
Plain construction never populates the extension store. A JSON ``null`` for
a field whose default is not ``None`` leaves the default in place.
"""
from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, FrozenSet, Mapping, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    PrivateAttr,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    model_serializer,
    model_validator,
)

from .extensions import DECODE_CONTEXT_KEY, PLAIN_VIEW_KEY, ExtensionStore, merge_extensions
from .json_codec import (
    Payload,
    decode_mapping_with_extensions,
    decode_with_extensions,
    encode_with_extensions,
)
from .known_fields import resolve_known_fields

M = TypeVar("M", bound="ExtensibleModel")


def is_empty(value: Any) -> bool:
    """Return True for the values an omit-empty rule drops."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


class ExtensibleModel(BaseModel):
    """Schema record with an attached extension store."""

    model_config = ConfigDict(extra="ignore", strict=True, validate_assignment=False)

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset()
    wire_omit_none: ClassVar[FrozenSet[str]] = frozenset()

    _extensions: ExtensionStore = PrivateAttr(default_factory=ExtensionStore)

    # ------------------------------------------------------------------
    # Pydantic hooks
    # ------------------------------------------------------------------
    @model_validator(mode="wrap")
    @classmethod
    def _split_wire_payload(
        cls, data: Any, handler: Callable[[Any], Any], info: ValidationInfo
    ) -> Any:
        if not isinstance(data, Mapping):
            return handler(data)
        decoding = bool(info.context and info.context.get(DECODE_CONTEXT_KEY))
        prepared = cls._from_wire(cls._drop_unset_nulls(data), decoding=decoding)
        record = handler(prepared)
        if decoding:
            record._extensions.populate(data, resolve_known_fields(record), owner=cls.__name__)
        return record

    @model_serializer(mode="wrap")
    def _serialize_wire(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> Dict[str, Any]:
        data = self._to_wire(handler(self))
        context = info.context if isinstance(info.context, Mapping) else None
        if context is not None and context.get(PLAIN_VIEW_KEY) is self:
            return data
        if not self._extensions.fields:
            return data
        return merge_extensions(data, self._extensions.fields)

    @classmethod
    def _drop_unset_nulls(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key, value in data.items():
            info = cls.model_fields.get(key)
            if value is None and info is not None and not (info.default is None and info.default_factory is None):
                continue
            out[key] = value
        return out

    @classmethod
    def _from_wire(cls, data: Dict[str, Any], *, decoding: bool) -> Dict[str, Any]:
        """Adjust an incoming payload before field validation."""
        return data

    def _to_wire(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply the omit rules to the serialized schema fields."""
        for key in self.wire_omit_empty:
            if key in data and is_empty(data[key]):
                del data[key]
        for key in self.wire_omit_none:
            if key in data and data[key] is None:
                del data[key]
        return data

    # ------------------------------------------------------------------
    # Encode-time checks
    # ------------------------------------------------------------------
    def validate_for_encode(self) -> None:
        """Run encode-time checks for this record and every nested record."""
        for name in type(self).model_fields:
            _validate_nested(getattr(self, name))

    # ------------------------------------------------------------------
    # Extension accessors
    # ------------------------------------------------------------------
    @property
    def extensions(self) -> ExtensionStore:
        return self._extensions

    def set_extension(self, key: str, value: Any) -> None:
        self._extensions.set(key, value)

    def get_extension(self, key: str, default: Any = None) -> Any:
        return self._extensions.get(key, default)

    def has_extension(self, key: str) -> bool:
        return self._extensions.has(key)

    def get_extensions(self) -> Dict[str, Any]:
        """Return the live extension mapping (mutations are kept)."""
        return self._extensions.fields

    @property
    def raw_bytes(self) -> bytes:
        return self._extensions.raw_bytes

    @property
    def extension_raw_bytes(self) -> bytes:
        return self._extensions.extension_raw_bytes

    # ------------------------------------------------------------------
    # Codec entry points
    # ------------------------------------------------------------------
    def to_json(self) -> bytes:
        return encode_with_extensions(self, self._extensions.fields)

    def to_dict(self) -> Dict[str, Any]:
        self.validate_for_encode()
        return self.model_dump(mode="json")

    @classmethod
    def from_json(cls: Type[M], data: Payload) -> M:
        return decode_with_extensions(data, cls)

    @classmethod
    def from_dict(cls: Type[M], data: Mapping[str, Any]) -> M:
        return decode_mapping_with_extensions(data, cls)


def _validate_nested(value: Optional[Any]) -> None:
    if isinstance(value, ExtensibleModel):
        value.validate_for_encode()
    elif isinstance(value, (list, tuple)):
        for item in value:
            _validate_nested(item)


__all__ = ["ExtensibleModel", "is_empty"]
