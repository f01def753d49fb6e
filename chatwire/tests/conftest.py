"""Pytest configuration for the chatwire test suite.

Provides structured log capture on the shared ``chatwire`` logger (which does
not propagate to the root logger) and isolates stream configuration from the
caller's environment.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest


class CapturedEvents(list):
    """List of captured ``LogRecord`` objects with event helpers."""

    def payloads(self) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for record in self:
            try:
                data = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(data, dict):
                out.append(data)
        return out

    def events(self) -> List[str]:
        return [p.get("event", "") for p in self.payloads()]

    def first(self, event: str) -> Dict[str, Any]:
        for payload in self.payloads():
            if payload.get("event") == event:
                return payload
        raise AssertionError(f"event {event!r} not logged; saw {self.events()}")


@pytest.fixture(autouse=True)
def clean_stream_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop stream overrides so every test starts from the defaults."""

    for name in (
        "CHATWIRE_STREAM_READ_TIMEOUT_SECONDS",
        "CHATWIRE_STREAM_MAX_NOISE_LINES",
        "CHATWIRE_STREAM_MAX_LINE_BYTES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[CapturedEvents]:
    """Capture every record emitted under the ``chatwire`` logger at DEBUG."""

    monkeypatch.setenv("CHATWIRE_LOG_LEVEL", "DEBUG")
    from chatwire.base.logging import configure_logger, get_logger

    base = get_logger("chatwire")
    records = CapturedEvents()
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore[method-assign]
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)
        monkeypatch.delenv("CHATWIRE_LOG_LEVEL", raising=False)
        configure_logger(level=logging.INFO)
