"""
Base LLM Adapter

Defines the abstract interface for all model backends.

Design decisions:
- Async-first: All methods are async for non-blocking I/O
- Streaming as first-class: AsyncIterator of decoded StreamChunk items
- Provider-agnostic: Common interface hides provider payload differences
- Single attempt: no retry logic; vendor SDK retries are disabled too
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from rat.core.exceptions import BackendError
from rat.core.types import Message, StreamChunk
from rat.observability.logging import get_logger

logger = get_logger("rat.reasoning.llm")


class BaseLLMAdapter(ABC):
    """
    Abstract base class for model backends.

    All model interactions go through this interface, enabling:
    - Provider switching without code changes
    - Consistent error handling (everything surfaces as BackendError)
    - Unified streaming interface
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider identifier."""
        pass

    @abstractmethod
    async def _do_complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Provider-specific implementation of completion.

        Must return the completed text and raise BackendError subclasses
        for vendor failures.
        """
        pass

    def _do_stream(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[StreamChunk]:
        """Provider-specific streaming implementation."""
        raise NotImplementedError(f"{self.provider_name} does not support streaming")

    async def complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Send a completion request and return the text.

        Raises:
            BackendError: Transport or vendor failure
        """
        try:
            return await self._do_complete(messages, model=model, max_tokens=max_tokens)
        except BackendError as e:
            logger.error(
                "Completion failed",
                error=e,
                provider=self.provider_name,
                model=model,
            )
            raise

    async def stream(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[StreamChunk]:
        """
        Stream a completion as decoded chunks.

        If the stream fails mid-way, the error is raised to the consumer.
        """
        try:
            async for chunk in self._do_stream(messages, model=model, max_tokens=max_tokens):
                yield chunk
        except BackendError as e:
            logger.error(
                "Stream failed",
                error=e,
                provider=self.provider_name,
                model=model,
            )
            raise

    @abstractmethod
    async def close(self) -> None:
        """
        Clean up resources (connection pools, etc).

        Should be called when adapter is no longer needed.
        """
        pass

    async def __aenter__(self) -> "BaseLLMAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def convert_messages_to_dicts(messages: list[Message]) -> list[dict[str, Any]]:
    """Convert Message objects to chat-completions dicts."""
    return [{"role": msg.role.value, "content": msg.content} for msg in messages]


def parse_retry_after(value: str | None) -> float | None:
    """Read a Retry-After header given in seconds; anything else is None."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None
