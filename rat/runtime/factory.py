"""
Runtime Factory

Assembles a TurnOrchestrator from settings.
Provides a clean API for wiring backends, router, extractor and context.
"""

from rat.config.settings import Settings
from rat.memory.context_store import ContextStore
from rat.observability.logging import get_logger
from rat.reasoning.extractor import ReasoningExtractor
from rat.reasoning.llm.anthropic_adapter import AnthropicAdapter
from rat.reasoning.llm.openai_adapter import OpenAIAdapter
from rat.reasoning.llm.stub_adapter import StubBackend
from rat.reasoning.router import ResponseRouter, Route
from rat.runtime.orchestrator import TurnOrchestrator

logger = get_logger("rat.runtime.factory")


def _secret(value) -> str | None:
    return value.get_secret_value() if value is not None else None


def create_router(
    settings: Settings,
    *,
    router_backend=None,
    anthropic_backend=None,
) -> ResponseRouter:
    """
    Build the two-way response router.

    Model ids containing the Anthropic route keyword go to Anthropic with
    its fixed model; everything else goes to OpenRouter.
    """
    if router_backend is None:
        router_backend = OpenAIAdapter(
            provider="openrouter",
            api_key=_secret(settings.openrouter.api_key),
            base_url=settings.openrouter.base_url,
            default_model=settings.openrouter.default_model,
            timeout=settings.request_timeout,
        )
    if anthropic_backend is None:
        anthropic_backend = AnthropicAdapter(
            api_key=_secret(settings.anthropic.api_key),
            model=settings.anthropic.model,
            max_tokens=settings.anthropic.max_tokens,
            timeout=settings.request_timeout,
        )

    return ResponseRouter(
        default=Route(name="openrouter", backend=router_backend),
        routes=[
            Route(
                name="anthropic",
                backend=anthropic_backend,
                keyword=settings.anthropic.route_keyword,
                model=settings.anthropic.model,
            ),
        ],
    )


def create_orchestrator(
    settings: Settings,
    *,
    context: ContextStore | None = None,
) -> TurnOrchestrator:
    """
    Create a TurnOrchestrator with backends chosen from settings.

    In offline mode every backend is a StubBackend and no API key is read.
    """
    if settings.offline_mode:
        logger.warning("Offline mode: using stub backends")
        reasoning_backend = StubBackend(name="deepseek")
        router = create_router(
            settings,
            router_backend=StubBackend(name="openrouter"),
            anthropic_backend=StubBackend(name="anthropic"),
        )
    else:
        reasoning_backend = OpenAIAdapter(
            provider="deepseek",
            api_key=_secret(settings.reasoning.api_key),
            base_url=settings.reasoning.base_url,
            default_model=settings.reasoning.model,
            timeout=settings.request_timeout,
        )
        router = create_router(settings)

    extractor = ReasoningExtractor(
        reasoning_backend,
        model=settings.reasoning.model,
        max_tokens=settings.reasoning.max_tokens,
    )

    return TurnOrchestrator(
        extractor=extractor,
        router=router,
        context=context or ContextStore(settings.context.max_entries),
    )
