"""
Chat message record.

The wire ``content`` member is either a string or an array of content
parts. On the record the two forms live in separate fields: a string fills
``content`` and an array fills ``multi_content``. Encoding folds whichever
one is set back into ``content``; setting both is rejected with
``ContentFieldsConflictError``.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from pydantic import Field

from ..base.errors import ContentFieldsConflictError
from ..codec.extensible_model import ExtensibleModel, is_empty
from .message_part import ChatMessagePart
from .tool_call import FunctionCall, ToolCall


class Role(str, Enum):
    SYSTEM = "system"
    DEVELOPER = "developer"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"
    TOOL = "tool"


class ChatCompletionMessage(ExtensibleModel):
    """A single chat message.

    Attributes:
        role: Author role (see :class:`Role`).
        content: Plain text body.
        multi_content: Multimodal body; mutually exclusive with ``content``.
        refusal: Refusal text from the model.
        name: Optional participant name.
        reasoning_content: Reasoning text emitted by reasoning models.
        function_call: Legacy single function call.
        tool_calls: Tool invocations requested by the model.
        tool_call_id: Identifier of the call a ``tool`` message answers.
    """

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset(
        {"content", "refusal", "name", "reasoning_content", "tool_calls", "tool_call_id"}
    )
    wire_omit_none: ClassVar[FrozenSet[str]] = frozenset({"function_call"})

    role: str = ""
    content: str = ""
    multi_content: Optional[List[ChatMessagePart]] = None
    refusal: str = ""
    name: str = ""
    reasoning_content: str = ""
    function_call: Optional[FunctionCall] = None
    tool_calls: List[ToolCall] = Field(default_factory=list)
    tool_call_id: str = ""

    @classmethod
    def _from_wire(cls, data: Dict[str, Any], *, decoding: bool) -> Dict[str, Any]:
        if decoding:
            # Not a wire member; an incoming key of that name is an extension.
            data.pop("multi_content", None)
        if isinstance(data.get("content"), list):
            data["multi_content"] = data.pop("content")
        return data

    def _to_wire(self, data: Dict[str, Any]) -> Dict[str, Any]:
        parts = data.pop("multi_content", None)
        if not is_empty(parts):
            if not is_empty(data.get("content")):
                raise ContentFieldsConflictError()
            data["content"] = parts
        return super()._to_wire(data)

    def validate_for_encode(self) -> None:
        if self.content and self.multi_content:
            raise ContentFieldsConflictError()
        super().validate_for_encode()


__all__ = ["Role", "ChatCompletionMessage"]
