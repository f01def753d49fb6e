"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging
import sys

from chatwire.base.log_support import JsonFormatter
from chatwire.base.logging import (
    LogContext,
    configure_logger,
    get_logger,
    log_event,
)


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("CHATWIRE_LOG_LEVEL", "ERROR")
    logger = get_logger(name="chatwire.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""  # nosec B101 - asserts are appropriate in unit tests
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"  # nosec B101
    assert data["logger"] == "chatwire.test"  # nosec B101
    monkeypatch.delenv("CHATWIRE_LOG_LEVEL")
    configure_logger(level=logging.INFO)


def test_log_event_includes_context_and_drops_none(log_capture):
    logger = get_logger("chatwire.test2")
    ctx = LogContext(model="m", response_id="r1", extra={"attempt": 1, "skip": None})
    log_event(logger, "stream.done", ctx, frames=3, error=None)
    payload = log_capture.first("stream.done")
    assert payload["model"] == "m" and payload["response_id"] == "r1"  # nosec B101
    assert payload["attempt"] == 1 and "skip" not in payload  # nosec B101
    assert payload["frames"] == 3  # nosec B101
    assert "error" not in payload  # nosec B101


def test_log_event_keep_none_and_level(log_capture):
    logger = get_logger("chatwire.test3")
    log_event(logger, "codec.sample", level=logging.WARNING, keep_none=True, error=None)
    record = next(r for r in log_capture if "codec.sample" in r.getMessage())
    assert record.levelno == logging.WARNING  # nosec B101
    assert json.loads(record.getMessage())["error"] is None  # nosec B101


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord("chatwire.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    out = json.loads(formatter.format(record))
    assert out["event"] == "e" and out["n"] == 1  # nosec B101
    assert out["level"] == "INFO"  # nosec B101


def test_configure_logger_adds_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "chatwire.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        log_event(get_logger("chatwire.file"), "file.event", answer=42)
        for handler in logger.handlers:
            handler.flush()
        lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
        assert any(line.get("event") == "file.event" and line.get("answer") == 42 for line in lines)  # nosec B101
    finally:
        logger = configure_logger(level=logging.INFO, file_path=None)
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)  # nosec B101


def _console_handlers(logger: logging.Logger) -> list:
    return [
        h for h in logger.handlers if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]


def test_console_handler_recovers_from_closed_stderr(monkeypatch):
    base = get_logger("chatwire")
    stale = io.StringIO()
    for handler in _console_handlers(base):
        handler.setStream(stale)
    stale.close()
    fresh = io.StringIO()
    monkeypatch.setattr(sys, "stderr", fresh)

    get_logger("chatwire.recovered").warning("after swap")

    handlers = _console_handlers(logging.getLogger("chatwire"))
    assert handlers  # nosec B101
    assert all(h.stream is fresh for h in handlers)  # nosec B101
    assert "after swap" in fresh.getvalue()  # nosec B101
