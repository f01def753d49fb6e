"""Stream decoder configuration.

Key Components
--------------
StreamConfig
    Frozen dataclass with the limits applied by every stream decoder.

get_stream_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again whenever one of them changes. Supported environment
    variables (all optional):
        CHATWIRE_STREAM_READ_TIMEOUT_SECONDS
        CHATWIRE_STREAM_MAX_NOISE_LINES
        CHATWIRE_STREAM_MAX_LINE_BYTES

Invalid or non-positive values fall back to the defaults, except
``CHATWIRE_STREAM_MAX_NOISE_LINES=0`` which disables the noise limit.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_NOISE_LINES = 300
DEFAULT_MAX_LINE_BYTES = 8 * 1024 * 1024

_ENV_READ_TIMEOUT = "CHATWIRE_STREAM_READ_TIMEOUT_SECONDS"
_ENV_MAX_NOISE = "CHATWIRE_STREAM_MAX_NOISE_LINES"
_ENV_MAX_LINE = "CHATWIRE_STREAM_MAX_LINE_BYTES"


@dataclass(frozen=True)
class StreamConfig:
    """Limits for one stream decoder.

    Attributes:
        read_timeout_seconds: Idle timeout for a single read; ``None`` waits
            until data, an error, or cancellation.
        max_noise_lines: Consecutive non-payload lines tolerated before a
            frame; ``0`` disables the check.
        max_line_bytes: Upper bound for a single buffered line.
    """

    read_timeout_seconds: float | None = None
    max_noise_lines: int = DEFAULT_MAX_NOISE_LINES
    max_line_bytes: int = DEFAULT_MAX_LINE_BYTES


_CACHED: StreamConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:
        return default


def _parse_env_int(name: str, default: int, *, allow_zero: bool = False) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw.strip())
    except ValueError:
        return default
    if val > 0 or (allow_zero and val == 0):
        return val
    return default


def get_stream_config() -> StreamConfig:
    """Return the process-cached :class:`StreamConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    cur_guard = "/".join(os.getenv(name, "") for name in (_ENV_READ_TIMEOUT, _ENV_MAX_NOISE, _ENV_MAX_LINE))
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = StreamConfig(
        read_timeout_seconds=_parse_env_float(_ENV_READ_TIMEOUT, None),
        max_noise_lines=_parse_env_int(_ENV_MAX_NOISE, DEFAULT_MAX_NOISE_LINES, allow_zero=True),
        max_line_bytes=_parse_env_int(_ENV_MAX_LINE, DEFAULT_MAX_LINE_BYTES),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = [
    "DEFAULT_MAX_LINE_BYTES",
    "DEFAULT_MAX_NOISE_LINES",
    "StreamConfig",
    "get_stream_config",
]
