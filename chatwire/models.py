"""
Wire record public surface.

This module re-exports the implementations under ``chatwire.models_parts``
so callers have one stable import path for every record type.
"""

from .models_parts.message_part import ChatMessageImageURL, ChatMessagePart, ChatMessagePartType, ImageURLDetail
from .models_parts.tool_call import FunctionCall, ToolCall
from .models_parts.message import ChatCompletionMessage, Role
from .models_parts.logprobs import (
    ChatCompletionStreamChoiceLogprobs,
    ChatCompletionTokenLogprob,
    ChatCompletionTokenLogprobTopLogprob,
)
from .models_parts.stream_choice import (
    ChatCompletionStreamChoice,
    ChatCompletionStreamChoiceDelta,
    FinishReason,
)
from .models_parts.stream_response import (
    ChatCompletionStreamResponse,
    PromptAnnotation,
    PromptFilterResult,
    Usage,
)

__all__ = [
    "ChatMessagePartType",
    "ImageURLDetail",
    "ChatMessageImageURL",
    "ChatMessagePart",
    "FunctionCall",
    "ToolCall",
    "Role",
    "ChatCompletionMessage",
    "ChatCompletionTokenLogprobTopLogprob",
    "ChatCompletionTokenLogprob",
    "ChatCompletionStreamChoiceLogprobs",
    "FinishReason",
    "ChatCompletionStreamChoiceDelta",
    "ChatCompletionStreamChoice",
    "Usage",
    "PromptAnnotation",
    "PromptFilterResult",
    "ChatCompletionStreamResponse",
]
