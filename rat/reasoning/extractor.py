"""
Reasoning Extractor

Drives the streaming reasoning backend and collects its chain-of-thought.

The backend is asked for almost no visible answer (a minimal token cap);
only the reasoning side-channel of each chunk is kept, in arrival order.
"""

from rat.core.exceptions import BackendError, RatError
from rat.core.interfaces import StreamingBackend
from rat.core.types import Message, MessageRole
from rat.observability.logging import get_logger

logger = get_logger("rat.reasoning.extractor")


class ReasoningExtractor:
    """First pipeline stage: prompt in, reasoning trace out."""

    def __init__(
        self,
        backend: StreamingBackend,
        *,
        model: str | None = None,
        max_tokens: int = 1,
    ):
        self._backend = backend
        self._model = model
        self._max_tokens = max_tokens

    @property
    def backend(self) -> StreamingBackend:
        return self._backend

    async def extract_reasoning(self, prompt: str) -> str:
        """
        Stream a completion and concatenate its reasoning fragments.

        An empty stream yields "". A stream that fails part way raises
        and no partial reasoning is returned.

        Raises:
            BackendError: The stream could not be created or broke off
        """
        messages = [Message(role=MessageRole.USER, content=prompt)]
        fragments: list[str] = []

        logger.debug(
            "Requesting reasoning",
            provider=self._backend.provider_name,
            prompt_length=len(prompt),
        )

        try:
            async for chunk in self._backend.stream(
                messages,
                model=self._model,
                max_tokens=self._max_tokens,
            ):
                if chunk.reasoning:
                    fragments.append(chunk.reasoning)
                    logger.debug("Received reasoning chunk", fragment=chunk.reasoning)
        except RatError:
            raise
        except Exception as e:
            raise BackendError(
                str(e) or type(e).__name__,
                context={"provider": self._backend.provider_name, "stage": "reasoning"},
                cause=e,
            )

        reasoning = "".join(fragments)
        logger.debug(
            "Completed reasoning",
            chunks=len(fragments),
            length=len(reasoning),
        )
        return reasoning
