"""
Normalized wire error kinds (taxonomy).

Defines the `ErrorKind` enumeration shared by the codec and the stream
decoder. Values are lowercase snake_case and are considered a stable public
contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated normalized error kinds representing failure categories."""

    MALFORMED_PAYLOAD = "malformed_payload"
    CONTENT_FIELDS_CONFLICT = "content_fields_conflict"
    EXTENSION_ENCODE_FAILURE = "extension_encode_failure"
    ENCODE_FAILURE = "encode_failure"
    STREAM_TRANSPORT_FAILURE = "stream_transport_failure"
    STREAM_TIMEOUT = "stream_timeout"
    STREAM_CANCELLED = "stream_cancelled"
    STREAM_ENDED_WITHOUT_SENTINEL = "stream_ended_without_sentinel"
    STREAM_SERVER_ERROR = "stream_server_error"
    TOO_MANY_NOISE_LINES = "too_many_noise_lines"
    FRAME_TOO_LARGE = "frame_too_large"
    UNKNOWN = "unknown"


__all__ = ["ErrorKind"]
