"""Extension store attached to every extensible record.

Purpose
-------
Hold the payload keys a record's schema does not know about, together with
the bytes the record was decoded from. The store is populated wholesale by
the decode path and mutated explicitly afterwards.

Notes
-----
- Raw byte copies do not take part in equality; two stores are equal when
  their ``fields`` are equal.
- Not safe for concurrent read/write.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping

from ..base.errors import ErrorKind
from ..base.logging import get_logger, log_event

# Validation context flag set by the decode entry points.
DECODE_CONTEXT_KEY = "chatwire_decode"
# Serialization context key naming the record whose plain view is requested.
PLAIN_VIEW_KEY = "chatwire_plain_view"


def compact_json(value: Any) -> bytes:
    """Serialize ``value`` as compact UTF-8 JSON."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


@dataclass
class ExtensionStore:
    """Keyed bag of extension values plus the record's original bytes."""

    fields: Dict[str, Any] = field(default_factory=dict)
    raw_bytes: bytes = field(default=b"", compare=False, repr=False)
    extension_raw_bytes: bytes = field(default=b"", compare=False, repr=False)

    def set(self, key: str, value: Any) -> None:
        self.fields[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def populate(self, payload: Mapping[str, Any], known: Iterable[str], *, owner: str = "") -> None:
        """Replace the store contents from a decoded payload.

        Keys of ``payload`` outside ``known`` become extension fields. When
        the extension subset cannot be re-serialized the failure is logged and
        ``extension_raw_bytes`` stays empty.
        """
        self.fields = split_extensions(payload, known)
        self.extension_raw_bytes = b""
        try:
            self.raw_bytes = compact_json(dict(payload))
        except (TypeError, ValueError):
            self.raw_bytes = b""
        if not self.fields:
            return
        try:
            self.extension_raw_bytes = compact_json(self.fields)
        except (TypeError, ValueError) as exc:
            log_event(
                get_logger("chatwire.codec"),
                "codec.extension_encode_failed",
                level=logging.WARNING,
                record=owner or None,
                kind=ErrorKind.EXTENSION_ENCODE_FAILURE.value,
                keys=sorted(self.fields),
                error=str(exc),
            )


def split_extensions(payload: Mapping[str, Any], known: Iterable[str]) -> Dict[str, Any]:
    """Return the entries of ``payload`` whose key is not in ``known``."""
    known_set = frozenset(known)
    return {k: v for k, v in payload.items() if k not in known_set}


def merge_extensions(base: Mapping[str, Any], extensions: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay ``extensions`` onto ``base``; extension values win on collision."""
    merged = dict(base)
    merged.update(extensions)
    return merged


__all__ = [
    "DECODE_CONTEXT_KEY",
    "PLAIN_VIEW_KEY",
    "ExtensionStore",
    "compact_json",
    "merge_extensions",
    "split_extensions",
]
