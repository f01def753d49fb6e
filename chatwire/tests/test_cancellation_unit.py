"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, cascade to children, late link of child after
parent cancel, callbacks, and raise_if_cancelled behavior.
"""
from __future__ import annotations

import threading

import pytest

from chatwire.base.cancellation import (
    CancellationToken,
    CancelledError,
)


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child1.cancelled is True and child1.reason == "stop"  # nosec B101
    assert child2.cancelled is True and child2.reason == "stop"  # nosec B101


def test_child_cancel_does_not_cancel_parent():
    parent = CancellationToken()
    child = parent.child()
    child.cancel("local")
    assert child.cancelled and not parent.cancelled  # nosec B101


def test_detached_child_no_longer_follows_parent():
    parent = CancellationToken()
    kept = parent.child()
    detached = parent.child()
    detached.detach()
    detached.detach()
    parent.cancel("stop")
    assert kept.cancelled is True  # nosec B101
    assert detached.cancelled is False  # nosec B101
    assert parent._children == [kept]  # nosec B101


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"  # nosec B101


def test_raise_if_cancelled_raises_custom_error():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()


def test_callbacks_run_once_and_can_be_unregistered():
    token = CancellationToken()
    calls = []
    token.add_callback(lambda: calls.append("a"))
    unregister = token.add_callback(lambda: calls.append("b"))
    unregister()
    token.cancel()
    token.cancel()
    assert calls == ["a"]  # nosec B101


def test_callback_registered_after_cancel_runs_immediately():
    token = CancellationToken()
    token.cancel()
    calls = []
    token.add_callback(lambda: calls.append(1))
    assert calls == [1]  # nosec B101


def test_wait_returns_when_cancelled_from_another_thread():
    token = CancellationToken()
    assert token.wait(0.01) is False  # nosec B101
    threading.Timer(0.05, token.cancel).start()
    assert token.wait(5.0) is True  # nosec B101
