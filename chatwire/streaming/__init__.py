"""Streaming package public surface.

Exports the generic :class:`StreamDecoder`, the chat-specialised
:class:`ChatCompletionStream`, byte source adapters, the rate-limit header
view, and per-stream metrics.
"""

from .byte_source import ByteSource, FileByteSource, HttpxByteSource, IterableByteSource, as_byte_source
from .chat_stream import ChatCompletionStream
from .rate_limit import RateLimitHeaders
from .stream_decoder import StreamDecoder, StreamState
from .stream_metrics import StreamMetrics

__all__ = [
    "ByteSource",
    "FileByteSource",
    "HttpxByteSource",
    "IterableByteSource",
    "as_byte_source",
    "ChatCompletionStream",
    "RateLimitHeaders",
    "StreamDecoder",
    "StreamState",
    "StreamMetrics",
]
