"""
Read-only view of the rate-limit headers sent with a streaming response.

Counters parse to ``int`` (``0`` when absent or malformed). Reset values are
kept as the raw duration strings the server sends (``"6m0s"``, ``"20ms"``)
and converted on demand.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> Optional[timedelta]:
    """Parse a duration string such as ``"1h2m3.5s"``.

    Returns ``None`` when ``value`` is empty or not a valid duration.
    """
    text = (value or "").strip()
    if not text:
        return None
    sign = 1.0
    if text[0] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return timedelta(0)
    pos = 0
    seconds = 0.0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            return None
        seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    return timedelta(seconds=sign * seconds) if pos else None


def _parse_int(value: Optional[str]) -> int:
    if not value:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


@dataclass(frozen=True)
class RateLimitHeaders:
    """Rate-limit counters and reset windows for requests and tokens."""

    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: str = ""
    reset_tokens: str = ""

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitHeaders":
        """Build the view from response headers (names are case-insensitive)."""
        lowered = {str(k).lower(): v for k, v in headers.items()}
        return cls(
            limit_requests=_parse_int(lowered.get("x-ratelimit-limit-requests")),
            limit_tokens=_parse_int(lowered.get("x-ratelimit-limit-tokens")),
            remaining_requests=_parse_int(lowered.get("x-ratelimit-remaining-requests")),
            remaining_tokens=_parse_int(lowered.get("x-ratelimit-remaining-tokens")),
            reset_requests=(lowered.get("x-ratelimit-reset-requests") or "").strip(),
            reset_tokens=(lowered.get("x-ratelimit-reset-tokens") or "").strip(),
        )

    def reset_requests_delta(self) -> timedelta:
        """Time until the request window resets; zero when unknown."""
        return parse_duration(self.reset_requests) or timedelta(0)

    def reset_tokens_delta(self) -> timedelta:
        """Time until the token window resets; zero when unknown."""
        return parse_duration(self.reset_tokens) or timedelta(0)

    def reset_requests_at(self, now: Optional[datetime] = None) -> datetime:
        return (now or datetime.now(timezone.utc)) + self.reset_requests_delta()

    def reset_tokens_at(self, now: Optional[datetime] = None) -> datetime:
        return (now or datetime.now(timezone.utc)) + self.reset_tokens_delta()


__all__ = ["RateLimitHeaders", "parse_duration"]
