"""
Turn Orchestrator

The single entry point for one generate_response call.

Design decisions:
- Strictly sequential: reasoning first, then the answer that depends on it
- Context is committed only after both stages succeed
- A requested clear is applied first and never rolled back
- Never knows about MCP, settings, or vendor SDKs
"""

from rat.core.exceptions import ExecutionError, RatError
from rat.core.types import DEFAULT_MODEL_LABEL, GenerateRequest, GenerateResult, Turn
from rat.memory.context_store import ContextStore
from rat.observability.logging import get_logger
from rat.reasoning.extractor import ReasoningExtractor
from rat.reasoning.prompts.template import build_reasoning_prompt
from rat.reasoning.router import ResponseRouter

logger = get_logger("rat.runtime.orchestrator")


def format_output(reasoning: str, response: str, show_reasoning: bool) -> str:
    """Shape the text returned to the caller."""
    if show_reasoning:
        return f"Reasoning:\n{reasoning}\n\nResponse:\n{response}"
    return response


class TurnOrchestrator:
    """Runs one question/reasoning/answer turn against shared context."""

    def __init__(
        self,
        extractor: ReasoningExtractor,
        router: ResponseRouter,
        context: ContextStore,
    ):
        self._extractor = extractor
        self._router = router
        self._context = context

    @property
    def context(self) -> ContextStore:
        return self._context

    async def handle(self, request: GenerateRequest) -> GenerateResult:
        """
        Answer one request.

        Raises:
            RatError: A stage failed; context is left untouched apart
                from a clear requested by this same call
            ExecutionError: Any other unexpected failure
        """
        if request.clear_context:
            self._context.clear()
            logger.info("Context cleared")

        context_prefix = self._context.render_as_prompt_prefix()
        reasoning_prompt = build_reasoning_prompt(request.prompt, history=context_prefix)

        try:
            reasoning = await self._extractor.extract_reasoning(reasoning_prompt)
            response = await self._router.route(
                request.prompt,
                reasoning,
                context_prefix,
                request.model,
            )
        except RatError as e:
            logger.error("Turn failed", error=e, code=e.code)
            raise
        except Exception as e:
            logger.error("Turn failed unexpectedly", error=e)
            raise ExecutionError(str(e) or type(e).__name__, cause=e)

        self._context.append(
            Turn(
                prompt=request.prompt,
                reasoning=reasoning,
                response=response,
                model=request.model or DEFAULT_MODEL_LABEL,
            )
        )
        logger.info(
            "Context updated",
            entries=len(self._context),
            max_entries=self._context.max_entries,
        )

        return GenerateResult(
            text=format_output(reasoning, response, request.show_reasoning),
        )

    async def aclose(self) -> None:
        """Close every backend reachable from this orchestrator, once each."""
        backends = [self._extractor.backend, *(route.backend for route in self._router.routes)]
        seen: set[int] = set()
        for backend in backends:
            if id(backend) in seen:
                continue
            seen.add(id(backend))
            await backend.close()
