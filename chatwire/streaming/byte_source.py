"""Byte sources consumed by the stream decoder.

A byte source is anything with ``read() -> bytes`` (``b""`` at end of stream)
and ``close()``. Adapters are provided for ``httpx.Response`` bodies, binary
file objects and iterables of byte chunks; :func:`as_byte_source` picks the
right one.
"""
from __future__ import annotations

import io
from collections.abc import Iterable as IterableABC
from contextlib import suppress
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol, runtime_checkable

import httpx

DEFAULT_CHUNK_SIZE = 64 * 1024


@runtime_checkable
class ByteSource(Protocol):
    def read(self) -> bytes:  # pragma: no cover - protocol
        ...

    def close(self) -> None:  # pragma: no cover - protocol
        ...


class IterableByteSource:
    """Reads successive non-empty chunks from an iterable of bytes."""

    def __init__(self, chunks: Iterable[bytes], on_close: Optional[Callable[[], None]] = None) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._on_close = on_close
        self._closed = False

    def read(self) -> bytes:
        if self._closed:
            return b""
        for chunk in self._chunks:
            if chunk:
                return bytes(chunk)
        return b""

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._chunks, "close", None)
        if callable(close):
            # A generator being advanced on another thread refuses to close.
            with suppress(ValueError, RuntimeError):
                close()
        if self._on_close is not None:
            self._on_close()


class FileByteSource:
    """Reads from a binary file-like object, at most ``chunk_size`` at a time."""

    def __init__(self, fileobj: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._file = fileobj
        self._chunk_size = chunk_size
        self._read = getattr(fileobj, "read1", None) or fileobj.read

    def read(self) -> bytes:
        return bytes(self._read(self._chunk_size))

    def close(self) -> None:
        self._file.close()


class HttpxByteSource:
    """Streams the body of an ``httpx.Response`` opened with ``stream=True``."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self._chunks: Optional[Iterator[bytes]] = None

    def read(self) -> bytes:
        if self._chunks is None:
            self._chunks = self.response.iter_bytes()
        for chunk in self._chunks:
            if chunk:
                return chunk
        return b""

    def close(self) -> None:
        self.response.close()


def as_byte_source(source: Any) -> ByteSource:
    """Coerce ``source`` into a :class:`ByteSource`.

    Accepts ``bytes``, ``httpx.Response``, binary file objects, objects that
    already satisfy the protocol, and iterables of byte chunks.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return IterableByteSource([bytes(source)])
    if isinstance(source, httpx.Response):
        return HttpxByteSource(source)
    if isinstance(source, io.IOBase) or hasattr(source, "read1"):
        return FileByteSource(source)
    if isinstance(source, ByteSource):
        return source
    if isinstance(source, IterableABC) and not isinstance(source, str):
        return IterableByteSource(source)
    raise TypeError(f"cannot read a byte stream from {type(source).__name__}")


__all__ = [
    "ByteSource",
    "IterableByteSource",
    "FileByteSource",
    "HttpxByteSource",
    "as_byte_source",
]
