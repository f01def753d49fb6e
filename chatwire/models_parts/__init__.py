"""Wire record parts package.

Re-exports the individual records so callers can import from
``chatwire.models_parts``; ``chatwire.models`` remains the primary stable
import path.
"""

from .message_part import ChatMessageImageURL, ChatMessagePart, ChatMessagePartType, ImageURLDetail
from .tool_call import FunctionCall, ToolCall
from .message import ChatCompletionMessage, Role
from .logprobs import (
    ChatCompletionStreamChoiceLogprobs,
    ChatCompletionTokenLogprob,
    ChatCompletionTokenLogprobTopLogprob,
)
from .stream_choice import ChatCompletionStreamChoice, ChatCompletionStreamChoiceDelta, FinishReason
from .stream_response import ChatCompletionStreamResponse, PromptAnnotation, PromptFilterResult, Usage

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
