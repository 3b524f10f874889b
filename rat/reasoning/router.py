"""
Response Router

Second pipeline stage: picks the answering backend from the requested
model id and returns the completed answer.

Design decisions:
- Routes are plain data (keyword -> backend, optional fixed model)
- First route whose keyword occurs in the model id wins
- Anything unmatched, including no model at all, goes to the default route
- The prompt is assembled once, identically for every backend
"""

from dataclasses import dataclass

from rat.core.exceptions import BackendError, RatError
from rat.core.interfaces import CompletionBackend
from rat.core.types import Message, MessageRole
from rat.observability.logging import get_logger
from rat.reasoning.prompts.template import build_response_prompt

logger = get_logger("rat.reasoning.router")


@dataclass(frozen=True)
class Route:
    """
    A routing target.

    `keyword` selects the route by substring match on the requested model
    id; the default route has none. When `model` is set it replaces the
    caller's model id; otherwise the caller's id is passed through and
    the backend falls back to its own default when the caller gave none.
    """

    name: str
    backend: CompletionBackend
    keyword: str | None = None
    model: str | None = None

    def matches(self, requested_model: str | None) -> bool:
        if self.keyword is None or not requested_model:
            return False
        return self.keyword in requested_model

    def resolve_model(self, requested_model: str | None) -> str | None:
        return self.model if self.model is not None else requested_model


class ResponseRouter:
    """Keyword-based dispatch over answering backends."""

    def __init__(self, default: Route, routes: list[Route] | None = None):
        if default.keyword is not None:
            raise ValueError("The default route must not have a keyword")
        self._default = default
        self._routes: list[Route] = []
        for route in routes or []:
            self.register(route)

    def register(self, route: Route) -> None:
        """Add a keyword route. Earlier routes take precedence."""
        if route.keyword is None:
            raise ValueError(f"Route {route.name!r} needs a keyword")
        self._routes.append(route)

    @property
    def routes(self) -> list[Route]:
        return [*self._routes, self._default]

    def select(self, model: str | None) -> Route:
        """Pick the route for a requested model id."""
        for route in self._routes:
            if route.matches(model):
                return route
        return self._default

    async def route(
        self,
        prompt: str,
        reasoning: str,
        prior_context: str = "",
        model: str | None = None,
    ) -> str:
        """
        Answer `prompt` using the extracted `reasoning`.

        Raises:
            BackendError: The selected backend failed
        """
        combined_prompt = build_response_prompt(prompt, reasoning, history=prior_context)
        selected = self.select(model)
        target_model = selected.resolve_model(model)

        logger.info(
            "Routing response",
            route=selected.name,
            provider=selected.backend.provider_name,
            requested_model=model or "default",
            model=target_model,
        )
        logger.debug("Combined prompt", prompt=combined_prompt)

        messages = [Message(role=MessageRole.USER, content=combined_prompt)]
        try:
            response = await selected.backend.complete(messages, model=target_model)
        except RatError:
            raise
        except Exception as e:
            raise BackendError(
                str(e) or type(e).__name__,
                context={"provider": selected.backend.provider_name, "stage": "response"},
                cause=e,
            )

        logger.debug("Received response", route=selected.name, length=len(response))
        return response
