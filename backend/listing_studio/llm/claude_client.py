"""Anthropic Messages API client with incremental SSE streaming."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from listing_studio.config import settings
from listing_studio.llm.base import CompletionClient
from listing_studio.llm.events import DeltaEvent, ErrorEvent, EventSink, StartedEvent, notify
from listing_studio.llm.sse import SseDecoder, SseFrame
from listing_studio.schemas.generation import CompletionResult
from listing_studio.utils.exceptions import (
    ApiStatusError,
    MissingApiKeyError,
    ResponseDecodeError,
    StreamedApiError,
    TransportError,
)

logger = logging.getLogger(__name__)


# -- wire shapes -----------------------------------------------------------------
# Every field the dispatcher does not depend on is optional, so unrelated
# provider-side additions never break parsing.


class _Usage(BaseModel):
    input_tokens: int | None = None
    output_tokens: int | None = None


class _ContentBlock(BaseModel):
    type: str = "text"
    text: str | None = None


class _MessageResponse(BaseModel):
    content: list[_ContentBlock] | None = None
    usage: _Usage | None = None


class _MessageMeta(BaseModel):
    usage: _Usage | None = None


class _MessageStart(BaseModel):
    message: _MessageMeta


class _Delta(BaseModel):
    type: str = ""
    text: str | None = None


class _ContentBlockDelta(BaseModel):
    delta: _Delta


class _MessageDelta(BaseModel):
    usage: _Usage | None = None


class _ErrorDetail(BaseModel):
    message: str


class _StreamError(BaseModel):
    error: _ErrorDetail


@dataclass
class UsageCounters:
    """Running token counts for one streaming call.

    Values are taken from the usage fields the API reports, never summed
    locally, and a smaller later report does not lower a count.
    """

    input_tokens: int = 0
    output_tokens: int = 0

    def record_input(self, tokens: int | None) -> None:
        if tokens is not None and tokens > self.input_tokens:
            self.input_tokens = tokens

    def record_output(self, tokens: int | None) -> None:
        if tokens is not None and tokens > self.output_tokens:
            self.output_tokens = tokens


def _parse(model: type[BaseModel], frame: SseFrame) -> Any:
    """Validate a frame payload, or None if it does not have the expected shape."""
    if frame.data is None:
        return None
    try:
        return model.model_validate_json(frame.data)
    except ValidationError as e:
        logger.debug(
            "Skipping %s frame with unexpected payload: %s", frame.event_type, e
        )
        return None


class ClaudeClient(CompletionClient):
    """Completion client for the Anthropic Messages API.

    One instance holds one ``httpx.AsyncClient`` whose connection pool is
    safe to share across concurrent generations. Pass ``http_client`` to
    reuse an existing pool; otherwise the client owns its own and closes it
    on ``aclose()`` or when used as an async context manager::

        async with ClaudeClient() as client:
            text, input_tokens, output_tokens = await client.complete(system, user, 1024)
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        *,
        api_url: str | None = None,
        api_version: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        key = api_key or settings.anthropic_api_key
        if not key:
            raise MissingApiKeyError(
                "No API key configured. Set ANTHROPIC_API_KEY in the environment or .env."
            )
        self._model = model or settings.anthropic_model
        self._api_url = api_url or settings.anthropic_api_url
        self._headers = {
            "content-type": "application/json",
            "anthropic-version": api_version or settings.anthropic_version,
            "x-api-key": key,
        }
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=settings.anthropic_timeout_seconds
        )

    @property
    def model_name(self) -> str:
        return self._model

    # -- lifecycle -------------------------------------------------------------

    async def __aenter__(self) -> ClaudeClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # -- public API ------------------------------------------------------------

    async def complete(
        self, system_prompt: str, user_prompt: str, max_tokens: int
    ) -> CompletionResult:
        """Single non-streaming request; returns the first text block and usage."""
        body = self._build_body(system_prompt, user_prompt, max_tokens, stream=False)
        logger.info("Completion request: model=%s max_tokens=%d", self._model, max_tokens)

        try:
            response = await self._http.post(self._api_url, headers=self._headers, json=body)
        except httpx.RequestError as e:
            logger.error("Completion request failed: %s", e)
            raise TransportError(f"Failed to send request: {e}") from e

        if not response.is_success:
            logger.error(
                "Completion API HTTP error %d: %s", response.status_code, response.text[:500]
            )
            raise ApiStatusError(response.status_code, response.text)

        try:
            envelope = _MessageResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise ResponseDecodeError(f"Failed to parse response: {e}") from e

        text = (envelope.content[0].text if envelope.content else None) or ""
        usage = envelope.usage or _Usage()
        input_tokens = usage.input_tokens or 0
        output_tokens = usage.output_tokens or 0
        logger.info(
            "Completion finished: input_tokens=%d output_tokens=%d",
            input_tokens,
            output_tokens,
        )
        return CompletionResult(text, input_tokens, output_tokens)

    async def stream(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        sink: EventSink,
    ) -> CompletionResult:
        """Streaming request; text deltas are forwarded to ``sink`` as they arrive.

        Emits ``started`` and ``delta`` events, plus ``error`` when the API
        reports one mid-stream. The terminal ``finished`` event is left to
        the caller, which knows the totals across all of its stages.
        """
        body = self._build_body(system_prompt, user_prompt, max_tokens, stream=True)
        logger.info("Streaming request: model=%s max_tokens=%d", self._model, max_tokens)

        decoder = SseDecoder()
        usage = UsageCounters()
        parts: list[str] = []

        try:
            async with self._http.stream(
                "POST", self._api_url, headers=self._headers, json=body
            ) as response:
                if not response.is_success:
                    raw = (await response.aread()).decode("utf-8", errors="replace")
                    logger.error(
                        "Streaming API HTTP error %d: %s", response.status_code, raw[:500]
                    )
                    raise ApiStatusError(response.status_code, raw)

                async for chunk in response.aiter_bytes():
                    for frame in decoder.feed(chunk):
                        self._dispatch(frame, usage, parts, sink)
        except httpx.RequestError as e:
            logger.error("Streaming request failed: %s", e)
            raise TransportError(f"Stream error: {e}") from e

        if decoder.pending.strip():
            logger.debug("Discarding unterminated trailing SSE block")

        full_text = "".join(parts)
        logger.info(
            "Stream finished: %d chars, input_tokens=%d output_tokens=%d",
            len(full_text),
            usage.input_tokens,
            usage.output_tokens,
        )
        return CompletionResult(full_text, usage.input_tokens, usage.output_tokens)

    # -- internals -------------------------------------------------------------

    def _build_body(
        self, system_prompt: str, user_prompt: str, max_tokens: int, *, stream: bool
    ) -> dict[str, Any]:
        return {
            "model": self._model,
            "max_tokens": max_tokens,
            "stream": stream,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}],
        }

    @staticmethod
    def _dispatch(
        frame: SseFrame,
        usage: UsageCounters,
        parts: list[str],
        sink: EventSink,
    ) -> None:
        event_type = frame.event_type

        if event_type == "message_start":
            start = _parse(_MessageStart, frame)
            if start is not None and start.message.usage is not None:
                usage.record_input(start.message.usage.input_tokens)
            notify(sink, StartedEvent(estimated_tokens=usage.input_tokens))

        elif event_type == "content_block_delta":
            block = _parse(_ContentBlockDelta, frame)
            # An empty text delta still counts as a delta event
            if (
                block is not None
                and block.delta.type == "text_delta"
                and block.delta.text is not None
            ):
                parts.append(block.delta.text)
                notify(sink, DeltaEvent(text=block.delta.text))

        elif event_type == "message_delta":
            delta = _parse(_MessageDelta, frame)
            if delta is not None and delta.usage is not None:
                usage.record_output(delta.usage.output_tokens)

        elif event_type == "error":
            err = _parse(_StreamError, frame)
            if err is not None:
                logger.error("Completion API reported a stream error: %s", err.error.message)
                notify(sink, ErrorEvent(message=err.error.message))
                raise StreamedApiError(err.error.message)

        # ping, content_block_start, content_block_stop, message_stop: nothing to do
