"""Known-field resolution follows what a record actually emits."""

from __future__ import annotations

from chatwire.codec import resolve_known_fields
from chatwire.models import (
    ChatCompletionMessage,
    ChatCompletionStreamChoice,
    ChatCompletionStreamChoiceDelta,
    ChatCompletionStreamResponse,
)


def test_empty_omittable_fields_are_not_known():
    delta = ChatCompletionStreamChoiceDelta()
    assert resolve_known_fields(delta) == frozenset()  # nosec B101


def test_populated_fields_are_known():
    delta = ChatCompletionStreamChoiceDelta(content="Hel", role="assistant")
    assert resolve_known_fields(delta) == frozenset({"content", "role"})  # nosec B101


def test_always_emitted_fields_are_known_even_when_empty():
    env = ChatCompletionStreamResponse()
    known = resolve_known_fields(env)
    for name in ("id", "object", "created", "model", "choices", "system_fingerprint"):
        assert name in known  # nosec B101
    assert "usage" not in known  # nosec B101
    assert "prompt_annotations" not in known  # nosec B101


def test_choice_finish_reason_always_known():
    assert "finish_reason" in resolve_known_fields(ChatCompletionStreamChoice())  # nosec B101


def test_extensions_are_not_reported_as_known():
    msg = ChatCompletionMessage(role="user", content="hi")
    msg.set_extension("x_trace", "abc")
    assert resolve_known_fields(msg) == frozenset({"role", "content"})  # nosec B101


def test_multi_content_reports_content_key():
    msg = ChatCompletionMessage(role="user", content=[{"type": "text", "text": "hi"}])
    assert resolve_known_fields(msg) == frozenset({"role", "content"})  # nosec B101
