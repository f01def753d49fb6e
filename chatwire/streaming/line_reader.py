"""Line framing over a byte source.

:class:`ReadPump` performs the actual ``read()`` calls. With a cancellation
token or an idle timeout configured, reads run on a helper thread and the
consumer waits on a result queue; the token's callback drops a marker into
that queue so a blocked wait returns as soon as cancellation fires. Only one
read is outstanding at any time.

:class:`LineReader` buffers chunks and hands out complete lines.
"""
from __future__ import annotations

import queue
import threading
from typing import Any, Callable, Optional, Tuple

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import FrameTooLargeError
from .byte_source import ByteSource

_CANCELLED = object()
_STOP = object()


class ReadPump:
    """Runs source reads so that a waiting consumer can be interrupted."""

    def __init__(
        self,
        source: ByteSource,
        *,
        token: CancellationToken | None = None,
        timeout: float | None = None,
    ) -> None:
        self._source = source
        self._token = token
        self._timeout = timeout
        self._requests: "queue.Queue[Any]" = queue.Queue()
        self._results: "queue.Queue[Tuple[Any, Optional[BaseException]]]" = queue.Queue()
        self._thread: threading.Thread | None = None
        self._unregister: Callable[[], None] | None = None
        self._pending = False

    @property
    def threaded(self) -> bool:
        return self._token is not None or self._timeout is not None

    def _start(self) -> None:
        self._thread = threading.Thread(target=self._run, name="chatwire-stream-reader", daemon=True)
        self._thread.start()
        if self._token is not None:
            self._unregister = self._token.add_callback(lambda: self._results.put((_CANCELLED, None)))

    def _run(self) -> None:
        while self._requests.get() is not _STOP:
            try:
                chunk = self._source.read()
            except Exception as exc:  # handed to the consumer thread
                self._results.put((None, exc))
            else:
                self._results.put((chunk, None))

    def read(self) -> bytes:
        """Return the next chunk (``b""`` at end of stream).

        Raises:
            CancelledError: the token fired before or during the read.
            TimeoutError: no chunk arrived within the idle timeout.
        """
        if self._token is not None:
            self._token.raise_if_cancelled()
        if not self.threaded:
            return self._source.read()
        if self._thread is None:
            self._start()
        if not self._pending:
            self._requests.put(True)
            self._pending = True
        try:
            chunk, exc = self._results.get(timeout=self._timeout)
        except queue.Empty:
            raise TimeoutError(f"no data received within {self._timeout}s") from None
        if chunk is _CANCELLED:
            raise CancelledError((self._token.reason if self._token else None) or "operation cancelled")
        self._pending = False
        if exc is not None:
            raise exc
        return chunk

    def close(self) -> None:
        if self._unregister is not None:
            self._unregister()
            self._unregister = None
        if self._thread is not None:
            self._requests.put(_STOP)


class LineReader:
    """Splits buffered chunks on ``\\n`` and strips one trailing ``\\r``.

    A final unterminated line at end of stream is returned as a line; after
    that ``read_line`` returns ``None``.
    """

    def __init__(self, pump: ReadPump, max_line_bytes: int) -> None:
        self._pump = pump
        self._max = max_line_bytes
        self._buffer = bytearray()
        self._eof = False

    def _take(self, end: int, consumed: int) -> bytes:
        line = bytes(self._buffer[:end])
        del self._buffer[:consumed]
        if len(line) > self._max:
            raise FrameTooLargeError(self._max)
        return line[:-1] if line.endswith(b"\r") else line

    def read_line(self) -> Optional[bytes]:
        while True:
            idx = self._buffer.find(b"\n")
            if idx >= 0:
                return self._take(idx, idx + 1)
            if len(self._buffer) > self._max:
                raise FrameTooLargeError(self._max)
            if self._eof:
                if self._buffer:
                    return self._take(len(self._buffer), len(self._buffer))
                return None
            chunk = self._pump.read()
            if chunk:
                self._buffer.extend(chunk)
            else:
                self._eof = True


__all__ = ["ReadPump", "LineReader"]
