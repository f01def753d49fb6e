"""Internal state holder for cancellation tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Callable, Dict, Optional


@dataclass
class State:
    """Internal state for cooperative cancellation tokens.

    ``event`` is set exactly once, when cancellation is requested, so waiters
    can block on it instead of polling ``cancelled``.
    """

    cancelled: bool = False
    reason: Optional[str] = None
    event: threading.Event = field(default_factory=threading.Event)
    callbacks: Dict[int, Callable[[], None]] = field(default_factory=dict)
    next_handle: int = 0


__all__ = ["State"]
