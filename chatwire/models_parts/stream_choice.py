"""
Stream choice and delta records.

A stream chunk carries one :class:`ChatCompletionStreamChoice` per requested
completion. Its ``delta`` holds the incremental fragment; ``finish_reason``
is ``null`` on the wire until the final chunk of that choice.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from pydantic import Field

from ..codec.extensible_model import ExtensibleModel
from .logprobs import ChatCompletionStreamChoiceLogprobs
from .tool_call import FunctionCall, ToolCall


class FinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    FUNCTION_CALL = "function_call"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    NULL = "null"


class ChatCompletionStreamChoiceDelta(ExtensibleModel):
    """Incremental message fragment. Every member is omitted when empty."""

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset(
        {"content", "reasoning_content", "role", "tool_calls", "refusal"}
    )
    wire_omit_none: ClassVar[FrozenSet[str]] = frozenset({"function_call"})

    content: str = ""
    reasoning_content: str = ""
    role: str = ""
    function_call: Optional[FunctionCall] = None
    tool_calls: List[ToolCall] = Field(default_factory=list)
    refusal: str = ""


class ChatCompletionStreamChoice(ExtensibleModel):
    """One choice within a stream chunk.

    Attributes:
        index: Position of the choice in the request's ``n`` completions.
        delta: The fragment carried by this chunk.
        logprobs: Token log probabilities, when requested.
        finish_reason: Why generation stopped; ``None`` while streaming.
            Serialized as JSON ``null`` when unset, empty, or ``"null"``.
        content_filter_results: Provider moderation annotations.
    """

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"content_filter_results"})
    wire_omit_none: ClassVar[FrozenSet[str]] = frozenset({"logprobs"})

    index: int = 0
    delta: ChatCompletionStreamChoiceDelta = Field(default_factory=ChatCompletionStreamChoiceDelta)
    logprobs: Optional[ChatCompletionStreamChoiceLogprobs] = None
    finish_reason: Optional[str] = None
    content_filter_results: Optional[Dict[str, Any]] = None

    def _to_wire(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if data.get("finish_reason") in ("", FinishReason.NULL.value):
            data["finish_reason"] = None
        return super()._to_wire(data)


__all__ = [
    "FinishReason",
    "ChatCompletionStreamChoiceDelta",
    "ChatCompletionStreamChoice",
]
