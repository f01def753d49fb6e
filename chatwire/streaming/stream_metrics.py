"""Stream decoder metrics.

Isolated within the streaming package to keep the decoder loop small.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single decoded stream.

    Token counts are copied from the last envelope that carried ``usage``.
    """

    frames: int = 0
    noise_lines: int = 0
    time_to_first_frame_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


def apply_token_usage(
    metrics: StreamMetrics,
    *,
    prompt: Optional[int],
    completion: Optional[int],
    total: Optional[int] = None,
) -> None:
    """Populate token usage fields on a :class:`StreamMetrics` instance."""
    metrics.prompt_tokens = prompt
    metrics.completion_tokens = completion
    metrics.total_tokens = total if total is not None else (
        (prompt + completion) if (prompt is not None and completion is not None) else None
    )


__all__ = ["StreamMetrics", "apply_token_usage"]
