"""
Stub LLM Adapter

A deterministic, offline-capable backend for testing and key-less runs.

Design decisions:
- Implements both CompletionBackend and StreamingBackend
- Returns scripted, deterministic reasoning fragments and answers
- Records every call so tests can assert on routing and prompts
- Can inject a failure, optionally after some chunks were streamed
- NEVER makes external network calls

Usage:
    # Explicitly
    from rat.reasoning.llm.stub_adapter import StubBackend
    backend = StubBackend(fragments=["Add ", "2 and 2."], response="4")

    # Via environment
    OFFLINE_MODE=true  # Every backend becomes a stub
"""

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass

from rat.core.types import Message, StreamChunk
from rat.reasoning.llm.base import BaseLLMAdapter

DEFAULT_FRAGMENTS = [
    "The question is answered offline, ",
    "so this reasoning is scripted.",
]
DEFAULT_RESPONSE = "[STUB] Running in offline mode; no model was called."


@dataclass(frozen=True)
class StubCall:
    """One recorded call to a stub backend."""

    kind: str  # "complete" or "stream"
    messages: list[Message]
    model: str | None
    max_tokens: int | None

    @property
    def prompt(self) -> str:
        return self.messages[-1].content if self.messages else ""


class StubBackend(BaseLLMAdapter):
    """
    A scripted backend for offline testing.

    Features:
    - No external API calls
    - Scripted reasoning stream and completion text
    - Optional visible content chunks interleaved with reasoning
    - Failure injection
    - Call recording
    """

    def __init__(
        self,
        *,
        name: str = "stub",
        fragments: list[str] | None = None,
        response: str = DEFAULT_RESPONSE,
        chunks: list[StreamChunk] | None = None,
        error: Exception | None = None,
        fail_after: int = 0,
        stream_delay_ms: int = 0,
    ):
        """
        Initialize the stub backend.

        Args:
            name: Provider identifier (for logging/routing assertions)
            fragments: Reasoning fragments to stream, one chunk each
            response: Text returned by complete()
            chunks: Explicit stream script; overrides `fragments`
            error: Exception raised by complete() and stream()
            fail_after: Chunks streamed before `error` is raised
            stream_delay_ms: Delay between stream chunks
        """
        self._name = name
        if chunks is None:
            frags = DEFAULT_FRAGMENTS if fragments is None else fragments
            chunks = [StreamChunk(reasoning=fragment) for fragment in frags]
        self._chunks = list(chunks)
        self._response = response
        self._error = error
        self._fail_after = fail_after
        self._stream_delay = stream_delay_ms / 1000.0
        self.calls: list[StubCall] = []
        self.closed = False

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> StubCall | None:
        return self.calls[-1] if self.calls else None

    async def _do_complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        self.calls.append(StubCall("complete", list(messages), model, max_tokens))
        await asyncio.sleep(0)

        if self._error is not None:
            raise self._error
        return self._response

    async def _do_stream(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> AsyncIterator[StreamChunk]:
        self.calls.append(StubCall("stream", list(messages), model, max_tokens))

        for index, chunk in enumerate(self._chunks):
            if self._error is not None and index >= self._fail_after:
                raise self._error
            yield chunk
            await asyncio.sleep(self._stream_delay)

        if self._error is not None:
            raise self._error

    async def close(self) -> None:
        self.closed = True

    def __repr__(self) -> str:
        return f"StubBackend(name={self._name!r}, calls={self.call_count})"
