"""Fake byte sources and SSE builders for stream decoder tests."""
from __future__ import annotations

import json
import threading
from typing import Any, Dict, Iterable, List, Optional


def sse(*payloads: Any, done: bool = True) -> bytes:
    """Build an SSE body from payload dicts (or raw strings)."""
    lines: List[str] = []
    for payload in payloads:
        body = payload if isinstance(payload, str) else json.dumps(payload)
        lines.append(f"data: {body}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def chunk(content: str, *, index: int = 0, finish_reason: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "test-model",
        "system_fingerprint": "fp_test",
        "choices": [{"index": index, "delta": {"content": content}, "finish_reason": finish_reason}],
    }
    body.update(extra)
    return body


class ChunkedSource:
    """Serves fixed chunks, then ``b""``; counts ``close`` calls."""

    def __init__(self, chunks: Iterable[bytes], *, fail_after: Optional[int] = None) -> None:
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self.reads = 0
        self.close_calls = 0

    def read(self) -> bytes:
        if self._fail_after is not None and self.reads >= self._fail_after:
            raise ConnectionResetError("connection reset by peer")
        self.reads += 1
        if self._chunks:
            return self._chunks.pop(0)
        return b""

    def close(self) -> None:
        self.close_calls += 1


def split_every(data: bytes, size: int) -> List[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]


class BlockingSource:
    """Serves ``prefix`` and then blocks until closed (a stalled connection)."""

    def __init__(self, prefix: bytes = b"") -> None:
        self._prefix = prefix
        self._released = threading.Event()
        self.close_calls = 0

    def read(self) -> bytes:
        if self._prefix:
            data, self._prefix = self._prefix, b""
            return data
        self._released.wait(30.0)
        return b""

    def close(self) -> None:
        self.close_calls += 1
        self._released.set()
