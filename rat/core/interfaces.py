"""
Core Interfaces and Protocols

Defines the contracts between modules to prevent circular dependencies.
The reasoning pipeline only ever talks to backends through these.

Design decisions:
- Protocol-based for structural subtyping
- Minimal interface surface: one method per capability
- No vendor payloads leak through; adapters normalize to core types
"""

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable

from rat.core.types import Message, StreamChunk


@runtime_checkable
class CompletionBackend(Protocol):
    """
    A backend that turns messages into one completed text.

    Implemented by: OpenAIAdapter, AnthropicAdapter, StubBackend
    Used by: ResponseRouter
    """

    @property
    def provider_name(self) -> str:
        """Provider identifier."""
        ...

    async def complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion and return its text."""
        ...

    async def close(self) -> None:
        """Release client resources."""
        ...


@runtime_checkable
class StreamingBackend(Protocol):
    """
    A backend that streams decoded chunks.

    Implemented by: OpenAIAdapter, StubBackend
    Used by: ReasoningExtractor
    """

    @property
    def provider_name(self) -> str:
        """Provider identifier."""
        ...

    def stream(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[StreamChunk]:
        """Stream a completion as StreamChunk items."""
        ...

    async def close(self) -> None:
        """Release client resources."""
        ...
