"""
Error classification helpers mapping exceptions to normalized ErrorKind values.

The stream decoder wraps whatever its byte source raises; this module decides
which kind a foreign exception belongs to so logs stay uniform regardless of
whether the source is an ``httpx`` response, a file, or a test double.
"""
from __future__ import annotations

import asyncio
import json
from typing import Tuple, Type

import httpx
from pydantic import ValidationError

from ..cancellation_parts.cancelled_error import CancelledError
from .error_kind import ErrorKind
from .wire_error import WireError


_TRANSPORT_TYPES: Tuple[Type[BaseException], ...] = (
    httpx.TransportError,
    httpx.StreamError,
    OSError,
    EOFError,
)

_PAYLOAD_TYPES: Tuple[Type[BaseException], ...] = (
    ValidationError,
    json.JSONDecodeError,
    UnicodeDecodeError,
    ValueError,
)


def classify_exception(exc: BaseException) -> ErrorKind:
    """Classify an exception into a normalized :class:`ErrorKind`.

    Precedence:
        1. WireError passthrough.
        2. Cooperative cancellation.
        3. Timeout exceptions (sync/async, including ``httpx`` timeouts).
        4. Transport failures.
        5. Payload decoding failures.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, WireError):
        return exc.kind
    if isinstance(exc, CancelledError):
        return ErrorKind.STREAM_CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorKind.STREAM_TIMEOUT
    if isinstance(exc, _TRANSPORT_TYPES):
        return ErrorKind.STREAM_TRANSPORT_FAILURE
    if isinstance(exc, _PAYLOAD_TYPES):
        return ErrorKind.MALFORMED_PAYLOAD
    return ErrorKind.UNKNOWN


__all__ = ["classify_exception"]
