"""Incremental decoder for ``data:``-framed event streams.

Purpose
-------
Turn a live byte source into a lazy, single-consumer iterator of typed
records, one per ``data:`` frame.

State machine
-------------
``AWAITING_FRAME`` -> ``FRAME_READY`` -> ``AWAITING_FRAME`` | ``TERMINATED`` |
``FAILED``. ``CLOSED`` is entered when the consumer closes the decoder before
a terminal state.

- Blank lines and lines that do not start with ``data:`` are skipped.
- ``data: [DONE]`` ends the iteration without error.
- Every other payload is decoded with the extension-preserving codec; a
  decode failure fails the stream with ``MalformedPayloadError``.
- A clean end of stream without ``[DONE]`` fails with
  ``StreamEndedWithoutSentinelError``; read failures become
  ``StreamTransportError`` (or ``StreamTimeoutError``/``StreamCancelledError``).

Resource discipline
-------------------
The decoder owns the byte source from construction and releases it exactly
once: on ``close()``, on leaving a ``with`` block, or when the iteration
terminates or fails. After that ``next()`` raises ``StopIteration``. A decoder
that is dropped without reaching any of those is released when it is
garbage collected.
"""
from __future__ import annotations

import logging
import time
import weakref
from enum import Enum
from typing import Any, Callable, Generic, List, Mapping, Optional, Type, TypeVar

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import (
    ErrorKind,
    StreamCancelledError,
    StreamEndedWithoutSentinelError,
    StreamServerError,
    StreamTimeoutError,
    StreamTransportError,
    TooManyNoiseLinesError,
    WireError,
    classify_exception,
)
from ..base.logging import LogContext, get_logger, log_event
from ..codec.extensible_model import ExtensibleModel
from ..codec.json_codec import decode_with_extensions
from ..config import StreamConfig, get_stream_config
from .byte_source import as_byte_source
from .line_reader import LineReader, ReadPump
from .stream_metrics import StreamMetrics

R = TypeVar("R", bound=ExtensibleModel)

DATA_PREFIX = b"data:"
DONE_SENTINEL = b"[DONE]"


class StreamState(str, Enum):
    AWAITING_FRAME = "awaiting_frame"
    FRAME_READY = "frame_ready"
    TERMINATED = "terminated"
    FAILED = "failed"
    CLOSED = "closed"


_FINAL_STATES = frozenset({StreamState.TERMINATED, StreamState.FAILED, StreamState.CLOSED})


def frame_payload(line: bytes) -> Optional[bytes]:
    """Return the payload of a ``data:`` line, or ``None`` for a noise line."""
    stripped = line.strip()
    if not stripped.startswith(DATA_PREFIX):
        return None
    return stripped[len(DATA_PREFIX):].strip()


def _release_resources(
    pump: ReadPump,
    source: Any,
    cleanups: List[Callable[[], None]],
    logger: logging.Logger,
    ctx: LogContext,
) -> None:
    pump.close()
    try:
        source.close()
    except Exception as exc:
        log_event(
            logger,
            "stream.release_failed",
            ctx,
            level=logging.WARNING,
            error=f"{type(exc).__name__}: {exc}",
        )
    for cleanup in cleanups:
        cleanup()


class StreamDecoder(Generic[R]):
    """Lazy iterator of ``target`` records decoded from a byte stream.

    Parameters
    ----------
    source:
        Anything accepted by :func:`as_byte_source`.
    target:
        Record type each frame decodes into.
    token:
        Optional cancellation token; firing it abandons a blocked read.
    config:
        Limits override; defaults to :func:`get_stream_config`.
    ctx:
        Logging context attached to every stream event.
    """

    def __init__(
        self,
        source: Any,
        target: Type[R],
        *,
        token: CancellationToken | None = None,
        config: StreamConfig | None = None,
        ctx: LogContext | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._source = as_byte_source(source)
        self._target = target
        self._token = token
        self._config = config or get_stream_config()
        self._ctx = ctx or LogContext()
        if self._ctx.source is None:
            self._ctx.source = type(self._source).__name__
        self._logger = logger or get_logger("chatwire.streaming")
        self._pump = ReadPump(self._source, token=token, timeout=self._config.read_timeout_seconds)
        self._reader = LineReader(self._pump, self._config.max_line_bytes)
        self._state = StreamState.AWAITING_FRAME
        self._cleanups: List[Callable[[], None]] = []
        # Runs once: on close/terminal state, or when an abandoned decoder is collected.
        self._finalizer = weakref.finalize(
            self, _release_resources, self._pump, self._source, self._cleanups, self._logger, self._ctx
        )
        self._finalizer.atexit = False
        self._t0 = time.perf_counter()
        self.metrics = StreamMetrics()
        log_event(
            self._logger,
            "stream.open",
            self._ctx,
            target=target.__name__,
            read_timeout_seconds=self._config.read_timeout_seconds,
            max_noise_lines=self._config.max_noise_lines,
        )

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------
    @property
    def state(self) -> StreamState:
        return self._state

    def __iter__(self) -> "StreamDecoder[R]":
        return self

    def __next__(self) -> R:
        if self._state in _FINAL_STATES:
            raise StopIteration
        try:
            record = self._next_frame()
        except WireError as exc:
            self._fail(exc)
            raise
        if record is None:
            self._finish()
            raise StopIteration
        return record

    def recv(self) -> R:
        """Return the next record; raises ``StopIteration`` once the stream is over."""
        return next(self)

    def _check_cancelled(self) -> None:
        if self._token is not None and self._token.cancelled:
            raise StreamCancelledError(self._token.reason or "stream cancelled")

    def _read_line(self) -> Optional[bytes]:
        try:
            return self._reader.read_line()
        except WireError:
            raise
        except CancelledError as exc:
            raise StreamCancelledError(str(exc) or "stream cancelled", raw=exc) from exc
        except Exception as exc:
            if self._token is not None and self._token.cancelled:
                raise StreamCancelledError(self._token.reason or "stream cancelled", raw=exc) from exc
            if classify_exception(exc) is ErrorKind.STREAM_TIMEOUT:
                raise StreamTimeoutError(f"stream read timed out: {exc}", raw=exc) from exc
            raise StreamTransportError(f"stream read failed: {exc}", raw=exc) from exc

    def _next_frame(self) -> Optional[R]:
        self._state = StreamState.AWAITING_FRAME
        limit = self._config.max_noise_lines
        noise = 0
        while True:
            self._check_cancelled()
            line = self._read_line()
            if line is None:
                raise StreamEndedWithoutSentinelError()
            payload = frame_payload(line)
            if payload is None:
                noise += 1
                self.metrics.noise_lines += 1
                if limit and noise > limit:
                    raise TooManyNoiseLinesError(limit)
                continue
            if payload == DONE_SENTINEL:
                return None
            record = decode_with_extensions(payload, self._target)
            error = self._server_error(record)
            if error is not None:
                raise StreamServerError.from_payload(error)
            self._state = StreamState.FRAME_READY
            self._check_cancelled()
            self._on_frame(record)
            return record

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def _server_error(self, record: R) -> Optional[Mapping[str, Any]]:
        """Return the error object when ``record`` is an in-stream error report."""
        return None

    def _on_frame(self, record: R) -> None:
        self.metrics.frames += 1
        if self.metrics.time_to_first_frame_ms is None:
            self.metrics.time_to_first_frame_ms = (time.perf_counter() - self._t0) * 1000.0
        log_event(self._logger, "stream.frame", self._ctx, level=logging.DEBUG, frame=self.metrics.frames)

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------
    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0

    def _finish(self) -> None:
        self._state = StreamState.TERMINATED
        self.metrics.total_duration_ms = self._elapsed_ms()
        log_event(
            self._logger,
            "stream.done",
            self._ctx,
            frames=self.metrics.frames,
            noise_lines=self.metrics.noise_lines,
            time_to_first_frame_ms=self.metrics.time_to_first_frame_ms,
            total_duration_ms=self.metrics.total_duration_ms,
            total_tokens=self.metrics.total_tokens,
        )
        self._release()

    def _fail(self, exc: WireError) -> None:
        self._state = StreamState.FAILED
        self.metrics.total_duration_ms = self._elapsed_ms()
        log_event(
            self._logger,
            "stream.failed",
            self._ctx,
            level=logging.WARNING,
            kind=exc.kind.value,
            error=exc.message,
            frames=self.metrics.frames,
        )
        self._release()

    def close(self) -> None:
        """Stop decoding and release the byte source. Safe to call repeatedly."""
        if self._state not in _FINAL_STATES:
            self._state = StreamState.CLOSED
            self.metrics.total_duration_ms = self._elapsed_ms()
            log_event(self._logger, "stream.closed", self._ctx, frames=self.metrics.frames)
        self._release()

    def _release(self) -> None:
        self._finalizer()

    def __enter__(self) -> "StreamDecoder[R]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "StreamState",
    "StreamDecoder",
    "frame_payload",
]
