"""Environment-driven stream configuration."""

from __future__ import annotations

import pytest

from chatwire.config import (
    DEFAULT_MAX_LINE_BYTES,
    DEFAULT_MAX_NOISE_LINES,
    StreamConfig,
    get_stream_config,
)


def test_defaults_without_env():
    cfg = get_stream_config()
    assert cfg == StreamConfig()  # nosec B101
    assert cfg.read_timeout_seconds is None  # nosec B101
    assert cfg.max_noise_lines == DEFAULT_MAX_NOISE_LINES == 300  # nosec B101
    assert cfg.max_line_bytes == DEFAULT_MAX_LINE_BYTES  # nosec B101


def test_env_overrides_are_applied_and_cache_refreshes(monkeypatch):
    first = get_stream_config()
    assert get_stream_config() is first  # nosec B101
    monkeypatch.setenv("CHATWIRE_STREAM_READ_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("CHATWIRE_STREAM_MAX_NOISE_LINES", "10")
    monkeypatch.setenv("CHATWIRE_STREAM_MAX_LINE_BYTES", "1024")
    cfg = get_stream_config()
    assert cfg is not first  # nosec B101
    assert cfg.read_timeout_seconds == 2.5  # nosec B101
    assert cfg.max_noise_lines == 10  # nosec B101
    assert cfg.max_line_bytes == 1024  # nosec B101


def test_zero_disables_noise_limit(monkeypatch):
    monkeypatch.setenv("CHATWIRE_STREAM_MAX_NOISE_LINES", "0")
    assert get_stream_config().max_noise_lines == 0  # nosec B101


@pytest.mark.parametrize("raw", ["abc", "-1", "0"])
def test_invalid_values_fall_back_to_defaults(monkeypatch, raw):
    monkeypatch.setenv("CHATWIRE_STREAM_READ_TIMEOUT_SECONDS", raw)
    monkeypatch.setenv("CHATWIRE_STREAM_MAX_LINE_BYTES", raw)
    cfg = get_stream_config()
    assert cfg.read_timeout_seconds is None  # nosec B101
    assert cfg.max_line_bytes == DEFAULT_MAX_LINE_BYTES  # nosec B101
