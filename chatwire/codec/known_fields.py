"""Known-field resolution without a schema registry.

The known-field set of a record is whatever its plain-data view emits: the
record is serialized with its own encoding rules (omit-empty applied, its own
extensions left out) and the top-level keys are collected. An empty value
under an omit-empty rule is therefore not "known" for that instance.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, FrozenSet

from pydantic_core import PydanticSerializationError

from ..base.logging import get_logger, log_event
from .extensions import PLAIN_VIEW_KEY

if TYPE_CHECKING:  # pragma: no cover
    from .extensible_model import ExtensibleModel


def resolve_known_fields(record: "ExtensibleModel") -> FrozenSet[str]:
    """Return the field names ``record`` emits when serialized.

    Returns an empty set (and logs ``codec.known_fields_unresolved``) when the
    record cannot be serialized.
    """
    try:
        data = record.model_dump(mode="json", context={PLAIN_VIEW_KEY: record})
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        log_event(
            get_logger("chatwire.codec"),
            "codec.known_fields_unresolved",
            level=logging.WARNING,
            record=type(record).__name__,
            error=str(exc),
        )
        return frozenset()
    return frozenset(data)


__all__ = ["resolve_known_fields"]
