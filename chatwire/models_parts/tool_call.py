"""Function and tool call records carried by messages and deltas."""
from __future__ import annotations

from typing import ClassVar, FrozenSet, Optional

from pydantic import Field

from ..codec.extensible_model import ExtensibleModel


class FunctionCall(ExtensibleModel):
    """Function name plus its JSON-encoded arguments string.

    In stream deltas both members arrive as fragments; consumers concatenate
    ``arguments`` across chunks.
    """

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"name", "arguments"})

    name: str = ""
    arguments: str = ""


class ToolCall(ExtensibleModel):
    """A tool invocation requested by the model.

    ``index`` is only present in stream deltas, where it identifies which
    call a fragment belongs to.
    """

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"id"})
    wire_omit_none: ClassVar[FrozenSet[str]] = frozenset({"index"})

    index: Optional[int] = None
    id: str = ""
    type: str = ""
    function: FunctionCall = Field(default_factory=FunctionCall)


__all__ = ["FunctionCall", "ToolCall"]
