"""Unified wire error taxonomy public surface.

This module re-exports the implementations under
``chatwire.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.wire_error import (
    ContentFieldsConflictError,
    EncodeError,
    FrameTooLargeError,
    MalformedPayloadError,
    StreamCancelledError,
    StreamEndedWithoutSentinelError,
    StreamServerError,
    StreamTimeoutError,
    StreamTransportError,
    TooManyNoiseLinesError,
    WireError,
)
from .errors_parts.classification import classify_exception

__all__ = [
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
]
