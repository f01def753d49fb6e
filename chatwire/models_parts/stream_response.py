"""
Stream envelope records.

:class:`ChatCompletionStreamResponse` is the unit produced for every
``data:`` frame of a chat completion stream. Vendor-specific members (for
example ``citations`` or an ``error`` object) are kept as extensions.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from pydantic import Field

from ..codec.extensible_model import ExtensibleModel
from .stream_choice import ChatCompletionStreamChoice


class Usage(ExtensibleModel):
    """Token accounting; sent on the last chunk when usage streaming is on."""

    wire_omit_none: ClassVar[FrozenSet[str]] = frozenset(
        {"prompt_tokens_details", "completion_tokens_details"}
    )

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    prompt_tokens_details: Optional[Dict[str, Any]] = None
    completion_tokens_details: Optional[Dict[str, Any]] = None


class PromptAnnotation(ExtensibleModel):
    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"prompt_index", "content_filter_results"})

    prompt_index: int = 0
    content_filter_results: Optional[Dict[str, Any]] = None


class PromptFilterResult(ExtensibleModel):
    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"content_filter_results"})

    index: int = 0
    content_filter_results: Optional[Dict[str, Any]] = None


class ChatCompletionStreamResponse(ExtensibleModel):
    """One decoded stream chunk.

    Attributes:
        id: Completion identifier shared by all chunks of one response.
        object: Always ``chat.completion.chunk`` from conforming servers.
        created: Unix timestamp (seconds).
        model: Model that produced the chunk.
        choices: Per-choice deltas; empty on a usage-only final chunk and
            ``None`` when the server sent ``null`` or omitted the member.
        system_fingerprint: Backend configuration fingerprint.
        prompt_annotations: Moderation annotations for the prompt.
        prompt_filter_results: Per-prompt filter results.
        usage: Token accounting, when present.
    """

    wire_omit_empty: ClassVar[FrozenSet[str]] = frozenset({"prompt_annotations", "prompt_filter_results"})
    wire_omit_none: ClassVar[FrozenSet[str]] = frozenset({"usage"})

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: Optional[List[ChatCompletionStreamChoice]] = None
    system_fingerprint: str = ""
    prompt_annotations: List[PromptAnnotation] = Field(default_factory=list)
    prompt_filter_results: List[PromptFilterResult] = Field(default_factory=list)
    usage: Optional[Usage] = None

    def server_error(self) -> Optional[Dict[str, Any]]:
        """Return the in-stream ``error`` object when this chunk is an error report."""
        error = self.get_extension("error")
        if isinstance(error, dict) and not self.choices:
            return error
        return None


__all__ = [
    "Usage",
    "PromptAnnotation",
    "PromptFilterResult",
    "ChatCompletionStreamResponse",
]
