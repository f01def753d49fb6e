"""Chat completion stream.

:class:`ChatCompletionStream` is the stream decoder specialised to
:class:`ChatCompletionStreamResponse` chunks. It owns a child cancellation
token, so ``cancel()`` never cancels a caller's token, and unlinks it from
the caller's token on release. It also exposes the response's rate-limit
headers and copies token usage into its metrics.
"""
from __future__ import annotations

from contextlib import suppress
from typing import Any, Mapping, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.logging import LogContext
from ..config import StreamConfig
from ..models import ChatCompletionStreamResponse
from .byte_source import HttpxByteSource
from .rate_limit import RateLimitHeaders
from .stream_decoder import StreamDecoder
from .stream_metrics import apply_token_usage


class ChatCompletionStream(StreamDecoder[ChatCompletionStreamResponse]):
    """Lazy iterator of chat completion chunks.

    Example::

        with client.stream("POST", "/chat/completions", json=body) as response:
            with ChatCompletionStream.from_httpx_response(response) as stream:
                for chunk in stream:
                    ...
    """

    def __init__(
        self,
        source: Any,
        *,
        token: CancellationToken | None = None,
        config: StreamConfig | None = None,
        headers: Optional[Mapping[str, str]] = None,
        ctx: LogContext | None = None,
    ) -> None:
        own_token = token.child() if token is not None else CancellationToken()
        super().__init__(source, ChatCompletionStreamResponse, token=own_token, config=config, ctx=ctx)
        self._cleanups.append(own_token.detach)
        self._rate_limit_headers = RateLimitHeaders.from_headers(headers or {})

    @classmethod
    def from_httpx_response(
        cls,
        response: httpx.Response,
        *,
        token: CancellationToken | None = None,
        config: StreamConfig | None = None,
    ) -> "ChatCompletionStream":
        """Decode the body of a response opened with ``client.stream(...)``."""
        ctx = LogContext()
        with suppress(RuntimeError):
            ctx.source = str(response.url)
        return cls(HttpxByteSource(response), token=token, config=config, headers=response.headers, ctx=ctx)

    def cancel(self, reason: str | None = None) -> None:
        """Abandon the stream; a blocked ``next()`` raises ``StreamCancelledError``."""
        self._token.cancel(reason or "stream cancelled by consumer")

    @property
    def rate_limit_headers(self) -> RateLimitHeaders:
        return self._rate_limit_headers

    def _server_error(self, record: ChatCompletionStreamResponse) -> Optional[Mapping[str, Any]]:
        return record.server_error()

    def _on_frame(self, record: ChatCompletionStreamResponse) -> None:
        if self._ctx.response_id is None and record.id:
            self._ctx.response_id = record.id
            self._ctx.model = record.model or None
        if record.usage is not None:
            apply_token_usage(
                self.metrics,
                prompt=record.usage.prompt_tokens,
                completion=record.usage.completion_tokens,
                total=record.usage.total_tokens,
            )
        super()._on_frame(record)


__all__ = ["ChatCompletionStream"]
