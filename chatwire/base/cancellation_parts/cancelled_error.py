"""Cancellation error type.

Defines the ``CancelledError`` raised by :meth:`CancellationToken.raise_if_cancelled`.
The stream decoder converts it into ``StreamCancelledError`` at its boundary.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request.

    Distinguishes deliberate cancellation from other runtime failures so
    callers can skip error logging or retry logic.
    """


__all__ = ["CancelledError"]
