"""
chatwire

Wire-level codec for chat completion APIs:

- an extension-preserving JSON codec that round-trips records carrying both
  schema fields and arbitrary vendor extension fields, and
- an incremental decoder for ``data:``-framed streaming responses.

Typical use::

    from chatwire import ChatCompletionMessage, ChatCompletionStream

    msg = ChatCompletionMessage.from_json(raw)
    msg.get_extension("vendor_field")

    with ChatCompletionStream.from_httpx_response(response) as stream:
        for chunk in stream:
            ...
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    ContentFieldsConflictError,
    EncodeError,
    ErrorKind,
    FrameTooLargeError,
    MalformedPayloadError,
    StreamCancelledError,
    StreamEndedWithoutSentinelError,
    StreamServerError,
    StreamTimeoutError,
    StreamTransportError,
    TooManyNoiseLinesError,
    WireError,
    classify_exception,
)
from .codec import (
    ExtensibleModel,
    ExtensionStore,
    decode_with_extensions,
    encode_with_extensions,
    resolve_known_fields,
)
from .config import StreamConfig, get_stream_config
from .models import (
    ChatCompletionMessage,
    ChatCompletionStreamChoice,
    ChatCompletionStreamChoiceDelta,
    ChatCompletionStreamChoiceLogprobs,
    ChatCompletionStreamResponse,
    ChatCompletionTokenLogprob,
    ChatCompletionTokenLogprobTopLogprob,
    ChatMessageImageURL,
    ChatMessagePart,
    ChatMessagePartType,
    FinishReason,
    FunctionCall,
    ImageURLDetail,
    PromptAnnotation,
    PromptFilterResult,
    Role,
    ToolCall,
    Usage,
)
from .streaming import ChatCompletionStream, RateLimitHeaders, StreamDecoder, StreamMetrics, StreamState

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Errors
    "ErrorKind",
    "WireError",
    "MalformedPayloadError",
    "ContentFieldsConflictError",
    "EncodeError",
    "StreamTransportError",
    "StreamTimeoutError",
    "StreamCancelledError",
    "StreamEndedWithoutSentinelError",
    "TooManyNoiseLinesError",
    "FrameTooLargeError",
    "StreamServerError",
    "classify_exception",
    # Cancellation
    "CancellationToken",
    "CancelledError",
    # Codec
    "ExtensibleModel",
    "ExtensionStore",
    "decode_with_extensions",
    "encode_with_extensions",
    "resolve_known_fields",
    # Config
    "StreamConfig",
    "get_stream_config",
    # Records
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
    # Streaming
    "ChatCompletionStream",
    "StreamDecoder",
    "StreamState",
    "StreamMetrics",
    "RateLimitHeaders",
]
