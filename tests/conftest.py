"""
Test Configuration

Shared fixtures and test utilities.
"""

import pytest

from rat.config.settings import Settings
from rat.memory.context_store import ContextStore
from rat.observability.logging import BufferHandler, LogLevel, configure_logging
from rat.reasoning.extractor import ReasoningExtractor
from rat.reasoning.llm.stub_adapter import StubBackend
from rat.reasoning.router import ResponseRouter, Route
from rat.runtime.orchestrator import TurnOrchestrator


@pytest.fixture(autouse=True)
def log_buffer():
    """Capture log records instead of writing to stderr."""
    buffer = BufferHandler(level=LogLevel.DEBUG)
    configure_logging(LogLevel.DEBUG, handlers=[buffer])
    yield buffer
    configure_logging(LogLevel.INFO, handlers=[])


@pytest.fixture
def reasoning_backend():
    """Streaming stub that reasons about 2 + 2."""
    return StubBackend(name="deepseek", fragments=["Add ", "2 and 2."])


@pytest.fixture
def openrouter_backend():
    """Default answering stub."""
    return StubBackend(name="openrouter", response="4")


@pytest.fixture
def anthropic_backend():
    """Keyword-routed answering stub."""
    return StubBackend(name="anthropic", response="Four.")


@pytest.fixture
def router(openrouter_backend, anthropic_backend):
    """Router with an Anthropic keyword route and an OpenRouter default."""
    return ResponseRouter(
        default=Route(name="openrouter", backend=openrouter_backend),
        routes=[
            Route(
                name="anthropic",
                backend=anthropic_backend,
                keyword="claude",
                model="claude-3-5-sonnet-20241022",
            ),
        ],
    )


@pytest.fixture
def context_store():
    """Empty context store with the default bound."""
    return ContextStore()


@pytest.fixture
def orchestrator(reasoning_backend, router, context_store):
    """Orchestrator wired entirely to stubs."""
    return TurnOrchestrator(
        extractor=ReasoningExtractor(reasoning_backend, model="deepseek-reasoner", max_tokens=1),
        router=router,
        context=context_store,
    )


@pytest.fixture
def offline_settings():
    """Settings that need no credentials."""
    return Settings(offline_mode=True)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
