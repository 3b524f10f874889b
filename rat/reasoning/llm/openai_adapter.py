"""
OpenAI-Compatible LLM Adapter

Implementation for any OpenAI chat-completions compatible API.
Serves both the DeepSeek reasoning backend and the OpenRouter router.

Design decisions:
- Uses official openai library for stability
- One class, configured per provider (base URL, key, default model)
- DeepSeek's `reasoning_content` delta extension is decoded here, so
  nothing downstream reads vendor payloads
- A missing API key is reported when the backend is used, not at startup
"""

from collections.abc import AsyncIterator
from typing import Any

import openai

from rat.core.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendNotConfiguredError,
    BackendRateLimitError,
    BackendResponseError,
    BackendTimeoutError,
)
from rat.core.types import Message, StreamChunk
from rat.observability.logging import get_logger
from rat.reasoning.llm.base import BaseLLMAdapter, convert_messages_to_dicts, parse_retry_after

logger = get_logger("rat.reasoning.llm.openai")

# Provider extension field carrying chain-of-thought fragments
REASONING_DELTA_FIELD = "reasoning_content"


def _translate_error(error: openai.OpenAIError, provider: str) -> BackendError:
    """Map an openai exception onto the backend error hierarchy."""
    context = {"provider": provider}

    if isinstance(error, openai.RateLimitError):
        return BackendRateLimitError(
            str(error),
            retry_after=parse_retry_after(error.response.headers.get("retry-after")),
            context=context,
            cause=error,
        )
    if isinstance(error, openai.APITimeoutError):
        return BackendTimeoutError(str(error), context=context, cause=error)
    if isinstance(error, openai.APIConnectionError):
        return BackendConnectionError(str(error), context=context, cause=error)
    return BackendResponseError(str(error), context=context, cause=error)


class OpenAIAdapter(BaseLLMAdapter):
    """
    OpenAI-compatible chat completions adapter.

    Supports:
    - Non-streaming completions (first choice's message content)
    - Streaming completions decoded into StreamChunk items
    - Custom base URLs (DeepSeek, OpenRouter, local servers)
    """

    def __init__(
        self,
        *,
        provider: str,
        api_key: str | None,
        default_model: str,
        base_url: str | None = None,
        timeout: float = 600.0,
    ):
        self._provider = provider
        self._default_model = default_model
        self._client: openai.AsyncOpenAI | None = None

        if api_key:
            client_kwargs: dict[str, Any] = {
                "api_key": api_key,
                "timeout": timeout,
                "max_retries": 0,
            }
            if base_url:
                client_kwargs["base_url"] = base_url
            self._client = openai.AsyncOpenAI(**client_kwargs)
            logger.info("Client initialized", provider=provider, base_url=base_url)
        else:
            logger.warning("No API key configured, backend disabled", provider=provider)

    @property
    def provider_name(self) -> str:
        return self._provider

    @property
    def default_model(self) -> str:
        return self._default_model

    def _require_client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            raise BackendNotConfiguredError(
                f"{self._provider} API key is not configured",
                context={"provider": self._provider},
            )
        return self._client

    def _build_request(
        self,
        messages: list[Message],
        model: str | None,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        request_kwargs: dict[str, Any] = {
            "model": model or self._default_model,
            "messages": convert_messages_to_dicts(messages),
        }
        if max_tokens is not None:
            request_kwargs["max_tokens"] = max_tokens
        return request_kwargs

    async def _do_complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Execute a chat completion request."""
        client = self._require_client()
        request_kwargs = self._build_request(messages, model, max_tokens)

        try:
            response = await client.chat.completions.create(**request_kwargs)
        except openai.OpenAIError as e:
            raise _translate_error(e, self._provider)

        if not response.choices:
            return ""
        content = response.choices[0].message.content or ""
        logger.debug(
            "Received completion",
            provider=self._provider,
            model=request_kwargs["model"],
            length=len(content),
        )
        return content

    async def _do_stream(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[StreamChunk]:
        """Stream a chat completion response."""
        client = self._require_client()
        request_kwargs = self._build_request(messages, model, max_tokens)
        request_kwargs["stream"] = True

        try:
            stream = await client.chat.completions.create(**request_kwargs)
            logger.debug("Stream created", provider=self._provider, model=request_kwargs["model"])

            async for chunk in stream:
                yield decode_chunk(chunk)
        except openai.OpenAIError as e:
            raise _translate_error(e, self._provider)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.close()


def decode_chunk(chunk: Any) -> StreamChunk:
    """
    Decode one chat-completion stream chunk.

    The reasoning fragment rides alongside the normal content delta as
    an extra attribute; chunks without choices decode to an empty item.
    """
    if not chunk.choices:
        return StreamChunk()

    delta = chunk.choices[0].delta
    if delta is None:
        return StreamChunk()

    return StreamChunk(
        content=getattr(delta, "content", None),
        reasoning=getattr(delta, REASONING_DELTA_FIELD, None),
    )
