"""
Anthropic LLM Adapter

Implementation for Anthropic's Claude Messages API.

Design decisions:
- Uses official anthropic library
- Always answers with one fixed model id; the caller's model string
  only selects this backend
- A non-text first content block is reported as a diagnostic answer,
  not an error, so the turn still completes
"""

from typing import Any

import anthropic

from rat.core.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendNotConfiguredError,
    BackendRateLimitError,
    BackendResponseError,
    BackendTimeoutError,
)
from rat.core.types import Message, MessageRole
from rat.observability.logging import get_logger
from rat.reasoning.llm.base import BaseLLMAdapter, parse_retry_after

logger = get_logger("rat.reasoning.llm.anthropic")

UNEXPECTED_RESPONSE_TYPE = "Error: Unexpected response type from Claude"


def _translate_error(error: anthropic.AnthropicError) -> BackendError:
    """Map an anthropic exception onto the backend error hierarchy."""
    context = {"provider": "anthropic"}

    if isinstance(error, anthropic.RateLimitError):
        return BackendRateLimitError(
            str(error),
            retry_after=parse_retry_after(error.response.headers.get("retry-after")),
            context=context,
            cause=error,
        )
    if isinstance(error, anthropic.APITimeoutError):
        return BackendTimeoutError(str(error), context=context, cause=error)
    if isinstance(error, anthropic.APIConnectionError):
        return BackendConnectionError(str(error), context=context, cause=error)
    return BackendResponseError(str(error), context=context, cause=error)


class AnthropicAdapter(BaseLLMAdapter):
    """
    Anthropic Claude API adapter.

    Sends each message as a single text content block and unwraps the
    first block of the reply.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str,
        max_tokens: int = 4096,
        timeout: float = 600.0,
    ):
        self._model = model
        self._max_tokens = max_tokens
        self._client: anthropic.AsyncAnthropic | None = None

        if api_key:
            self._client = anthropic.AsyncAnthropic(
                api_key=api_key,
                timeout=timeout,
                max_retries=0,
            )
            logger.info("Client initialized", provider="anthropic", model=model)
        else:
            logger.warning("No API key configured, backend disabled", provider="anthropic")

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model(self) -> str:
        return self._model

    def _require_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            raise BackendNotConfiguredError(
                "anthropic API key is not configured",
                context={"provider": "anthropic"},
            )
        return self._client

    def _convert_messages(
        self,
        messages: list[Message],
    ) -> tuple[str | None, list[dict[str, Any]]]:
        """
        Convert messages to Anthropic format.

        Anthropic requires system message separate from conversation.
        Returns (system_prompt, messages).
        """
        system_prompt = None
        converted = []

        for msg in messages:
            if msg.role == MessageRole.SYSTEM:
                system_prompt = msg.content
                continue
            converted.append(
                {
                    "role": msg.role.value,
                    "content": [{"type": "text", "text": msg.content}],
                }
            )

        return system_prompt, converted

    async def _do_complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Execute a message request and unwrap the first content block."""
        client = self._require_client()
        system_prompt, converted_messages = self._convert_messages(messages)

        request_kwargs: dict[str, Any] = {
            "model": model or self._model,
            "max_tokens": max_tokens or self._max_tokens,
            "messages": converted_messages,
        }
        if system_prompt:
            request_kwargs["system"] = system_prompt

        try:
            response = await client.messages.create(**request_kwargs)
        except anthropic.AnthropicError as e:
            raise _translate_error(e)

        if not response.content:
            raise BackendResponseError(
                "Anthropic returned no content blocks",
                context={"provider": "anthropic", "model": request_kwargs["model"]},
            )

        block = response.content[0]
        if block.type == "text":
            logger.debug("Received completion", provider="anthropic", length=len(block.text))
            return block.text

        logger.warning(
            "Unexpected response type",
            provider="anthropic",
            block_type=block.type,
        )
        return UNEXPECTED_RESPONSE_TYPE

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.close()
