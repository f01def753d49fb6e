"""
Base Package

Exports the ambient building blocks shared by the codec and streaming layers:
- Errors: normalized ``WireError`` taxonomy and ``classify_exception``
- Cancellation: thread-safe cooperative ``CancellationToken``
- Logging: structured JSON logger helpers
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
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
from .logging import LogContext, configure_logger, get_logger, log_event

__all__ = [
    # Cancellation
    "CancellationToken",
    "CancelledError",
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
    # Logging
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
