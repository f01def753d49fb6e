"""Token log-probability records attached to stream choices."""
from __future__ import annotations

from typing import ClassVar, FrozenSet, List, Optional

from pydantic import Field

from ..codec.extensible_model import ExtensibleModel


class ChatCompletionTokenLogprobTopLogprob(ExtensibleModel):
    """One alternative token considered at a position. All members are always emitted."""

    token: str = ""
    bytes: Optional[List[int]] = None
    logprob: float = 0.0


class ChatCompletionTokenLogprob(ExtensibleModel):
    """Log probability of one emitted token plus its top alternatives.

    ``top_logprobs`` is always emitted and serializes as ``null`` when unset.
    """

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"bytes", "logprob"})

    token: str = ""
    bytes: Optional[List[int]] = None
    logprob: float = 0.0
    top_logprobs: Optional[List[ChatCompletionTokenLogprobTopLogprob]] = None


class ChatCompletionStreamChoiceLogprobs(ExtensibleModel):
    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"content", "refusal"})

    content: List[ChatCompletionTokenLogprob] = Field(default_factory=list)
    refusal: List[ChatCompletionTokenLogprob] = Field(default_factory=list)


__all__ = [
    "ChatCompletionTokenLogprobTopLogprob",
    "ChatCompletionTokenLogprob",
    "ChatCompletionStreamChoiceLogprobs",
]
