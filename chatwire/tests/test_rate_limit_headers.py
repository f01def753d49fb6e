"""Rate-limit header parsing."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from chatwire.streaming.rate_limit import RateLimitHeaders, parse_duration


def test_from_httpx_headers():
    headers = httpx.Headers(
        {
            "X-RateLimit-Limit-Requests": "60",
            "x-ratelimit-limit-tokens": "150000",
            "x-ratelimit-remaining-requests": "59",
            "x-ratelimit-remaining-tokens": "149984",
            "x-ratelimit-reset-requests": "1s",
            "x-ratelimit-reset-tokens": "6m0s",
        }
    )
    rl = RateLimitHeaders.from_headers(headers)
    assert (rl.limit_requests, rl.limit_tokens) == (60, 150000)  # nosec B101
    assert (rl.remaining_requests, rl.remaining_tokens) == (59, 149984)  # nosec B101
    assert rl.reset_requests == "1s" and rl.reset_tokens == "6m0s"  # nosec B101
    assert rl.reset_requests_delta() == timedelta(seconds=1)  # nosec B101
    assert rl.reset_tokens_delta() == timedelta(minutes=6)  # nosec B101


def test_missing_or_malformed_counters_are_zero():
    rl = RateLimitHeaders.from_headers({"x-ratelimit-limit-requests": "lots"})
    assert rl == RateLimitHeaders()  # nosec B101
    assert rl.reset_tokens_delta() == timedelta(0)  # nosec B101


def test_reset_at_is_relative_to_now():
    rl = RateLimitHeaders(reset_requests="20ms")
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert rl.reset_requests_at(now) == now + timedelta(milliseconds=20)  # nosec B101
    assert rl.reset_tokens_at().tzinfo is timezone.utc  # nosec B101


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("0", timedelta(0)),
        ("1h2m3s", timedelta(hours=1, minutes=2, seconds=3)),
        ("1.5s", timedelta(seconds=1.5)),
        ("250us", timedelta(microseconds=250)),
        ("", None),
        ("soon", None),
        ("5", None),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected  # nosec B101
