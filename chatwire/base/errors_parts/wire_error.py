"""
Structured wire error exception types.

`WireError` carries a normalized :class:`ErrorKind` so callers can branch on
the failure category without string matching. Each concrete subclass pins its
kind; none of them is retried by this layer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .error_kind import ErrorKind


@dataclass
class WireError(Exception):
    """Represents a structured codec or stream failure.

    Attributes:
        message: Human-readable error message suitable for logging.
        kind: Normalized :class:`ErrorKind` classification for the failure.
        raw: Optional original exception for diagnostics.
    """

    message: str
    kind: ErrorKind = ErrorKind.UNKNOWN
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.kind.value}: {self.message}"


class MalformedPayloadError(WireError):
    """Bytes are not a JSON object, or a known field has the wrong shape."""

    def __init__(self, message: str, raw: Optional[BaseException] = None) -> None:
        super().__init__(message=message, kind=ErrorKind.MALFORMED_PAYLOAD, raw=raw)


class ContentFieldsConflictError(WireError):
    """A message sets both the single-content and the multi-content form."""

    def __init__(self, message: str = "content and multi_content cannot both be set") -> None:
        super().__init__(message=message, kind=ErrorKind.CONTENT_FIELDS_CONFLICT)


class EncodeError(WireError):
    """A record (or one of its extension values) could not be serialized."""

    def __init__(self, message: str, raw: Optional[BaseException] = None) -> None:
        super().__init__(message=message, kind=ErrorKind.ENCODE_FAILURE, raw=raw)


class StreamTransportError(WireError):
    """The byte source failed or closed unexpectedly mid-stream."""

    def __init__(
        self,
        message: str,
        raw: Optional[BaseException] = None,
        kind: ErrorKind = ErrorKind.STREAM_TRANSPORT_FAILURE,
    ) -> None:
        super().__init__(message=message, kind=kind, raw=raw)


class StreamTimeoutError(StreamTransportError):
    """No bytes arrived within the configured idle read timeout."""

    def __init__(self, message: str, raw: Optional[BaseException] = None) -> None:
        super().__init__(message, raw=raw, kind=ErrorKind.STREAM_TIMEOUT)


class StreamCancelledError(WireError):
    """The cancellation token fired while the stream was being read."""

    def __init__(self, message: str = "stream cancelled", raw: Optional[BaseException] = None) -> None:
        super().__init__(message=message, kind=ErrorKind.STREAM_CANCELLED, raw=raw)


class StreamEndedWithoutSentinelError(WireError):
    """The source closed cleanly before the ``[DONE]`` frame was seen."""

    def __init__(self, message: str = "stream ended without [DONE] marker") -> None:
        super().__init__(message=message, kind=ErrorKind.STREAM_ENDED_WITHOUT_SENTINEL)


class TooManyNoiseLinesError(WireError):
    """Too many non-payload lines arrived before the next frame."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            message=f"more than {limit} non-data lines before the next frame",
            kind=ErrorKind.TOO_MANY_NOISE_LINES,
        )
        self.limit = limit


class FrameTooLargeError(WireError):
    """A single line exceeded the configured size limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            message=f"stream line exceeds {limit} bytes",
            kind=ErrorKind.FRAME_TOO_LARGE,
        )
        self.limit = limit


class StreamServerError(WireError):
    """The server sent an ``{"error": {...}}`` object in place of a chunk.

    Attributes mirror the usual error object members; any of them may be
    ``None`` when the server omits it.
    """

    def __init__(
        self,
        message: str,
        *,
        error_type: Optional[str] = None,
        code: Any = None,
        param: Optional[str] = None,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, kind=ErrorKind.STREAM_SERVER_ERROR)
        self.error_type = error_type
        self.code = code
        self.param = param
        self.payload = dict(payload or {})

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StreamServerError":
        """Build the error from the ``error`` member of a stream frame."""
        message = payload.get("message")
        return cls(
            str(message) if message else "server reported an error",
            error_type=payload.get("type"),
            code=payload.get("code"),
            param=payload.get("param"),
            payload=payload,
        )


__all__ = [
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
]
