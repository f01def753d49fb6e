"""
Multimodal message content parts.

Defines :class:`ChatMessagePart` (one element of an array-valued message
``content``) and :class:`ChatMessageImageURL`. Unknown keys on either record
are preserved as extensions.
"""
from __future__ import annotations

from enum import Enum
from typing import ClassVar, FrozenSet, Optional

from ..codec.extensible_model import ExtensibleModel


class ChatMessagePartType(str, Enum):
    TEXT = "text"
    IMAGE_URL = "image_url"


class ImageURLDetail(str, Enum):
    HIGH = "high"
    LOW = "low"
    AUTO = "auto"


class ChatMessageImageURL(ExtensibleModel):
    """Image reference inside a content part.

    Attributes:
        url: HTTP(S) or data URL of the image.
        detail: Resolution hint (see :class:`ImageURLDetail`).
    """

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"url", "detail"})

    url: str = ""
    detail: str = ""


class ChatMessagePart(ExtensibleModel):
    """One element of a multimodal message body."""

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"text"})
    wire_omit_none: ClassVar[FrozenSet[str]] = frozenset({"image_url"})

    type: str = ""
    text: str = ""
    image_url: Optional[ChatMessageImageURL] = None


__all__ = [
    "ChatMessagePartType",
    "ImageURLDetail",
    "ChatMessageImageURL",
    "ChatMessagePart",
]
