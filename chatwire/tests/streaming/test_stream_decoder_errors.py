"""Failure modes of the stream decoder."""
from __future__ import annotations

import pytest

from chatwire.base.errors import (
    ErrorKind,
    FrameTooLargeError,
    MalformedPayloadError,
    StreamEndedWithoutSentinelError,
    StreamServerError,
    StreamTransportError,
    TooManyNoiseLinesError,
)
from chatwire.config import StreamConfig
from chatwire.streaming import ChatCompletionStream, StreamState
from chatwire.tests.streaming.helpers import ChunkedSource, chunk, sse


def test_missing_sentinel_is_reported():
    source = ChunkedSource([sse(chunk("a"), done=False)])
    stream = ChatCompletionStream(source)
    next(stream)
    with pytest.raises(StreamEndedWithoutSentinelError):
        next(stream)
    assert stream.state is StreamState.FAILED  # nosec B101 - pytest assert in tests
    assert source.close_calls == 1  # nosec B101


def test_transport_failure_is_surfaced():
    source = ChunkedSource([sse(chunk("a"), done=False)], fail_after=1)
    stream = ChatCompletionStream(source)
    next(stream)
    with pytest.raises(StreamTransportError) as exc:
        next(stream)
    assert exc.value.kind is ErrorKind.STREAM_TRANSPORT_FAILURE  # nosec B101
    assert isinstance(exc.value.raw, ConnectionResetError)  # nosec B101
    assert source.close_calls == 1  # nosec B101


def test_malformed_frame_fails_the_stream(log_capture):
    source = ChunkedSource([sse(chunk("ok"), "{not json", chunk("never"))])
    stream = ChatCompletionStream(source)
    next(stream)
    with pytest.raises(MalformedPayloadError):
        next(stream)
    assert stream.state is StreamState.FAILED  # nosec B101
    assert list(stream) == []  # nosec B101
    assert log_capture.first("stream.failed")["kind"] == "malformed_payload"  # nosec B101


def test_known_field_with_wrong_type_fails_the_stream():
    stream = ChatCompletionStream(ChunkedSource([sse({"choices": "nope"})]))
    with pytest.raises(MalformedPayloadError):
        next(stream)


def test_in_stream_error_object_raises_server_error():
    error = {"error": {"message": "The server is overloaded", "type": "server_error", "code": 503, "param": None}}
    stream = ChatCompletionStream(ChunkedSource([sse(chunk("a"), error)]))
    next(stream)
    with pytest.raises(StreamServerError) as exc:
        next(stream)
    assert exc.value.message == "The server is overloaded"  # nosec B101
    assert exc.value.error_type == "server_error" and exc.value.code == 503  # nosec B101


def test_too_many_noise_lines():
    body = b": ping\n" * 5 + sse(chunk("late"))
    stream = ChatCompletionStream(ChunkedSource([body]), config=StreamConfig(max_noise_lines=3))
    with pytest.raises(TooManyNoiseLinesError) as exc:
        next(stream)
    assert exc.value.limit == 3  # nosec B101


def test_noise_limit_counts_per_frame_and_zero_disables():
    body = b": ping\n" * 3 + sse(chunk("a"), done=False) + b": ping\n" * 2 + sse(chunk("b"))
    stream = ChatCompletionStream(ChunkedSource([body]), config=StreamConfig(max_noise_lines=4))
    assert len(list(stream)) == 2  # nosec B101

    long_noise = b": ping\n" * 500 + sse(chunk("c"))
    unlimited = ChatCompletionStream(ChunkedSource([long_noise]), config=StreamConfig(max_noise_lines=0))
    assert len(list(unlimited)) == 1  # nosec B101


def test_frame_too_large():
    stream = ChatCompletionStream(ChunkedSource([sse(chunk("x" * 500))]), config=StreamConfig(max_line_bytes=100))
    with pytest.raises(FrameTooLargeError):
        next(stream)


def test_source_released_exactly_once_across_paths():
    source = ChunkedSource([sse(chunk("a"))])
    stream = ChatCompletionStream(source)
    list(stream)
    stream.close()
    stream.close()
    assert source.close_calls == 1  # nosec B101
