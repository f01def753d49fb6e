"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatwire.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind
from .wire_error import (
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
from .classification import classify_exception

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
