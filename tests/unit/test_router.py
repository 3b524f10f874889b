"""
Unit Tests - Response Router
"""

import pytest

from rat.core.exceptions import BackendError, BackendNotConfiguredError
from rat.reasoning.llm.stub_adapter import StubBackend
from rat.reasoning.router import ResponseRouter, Route


class TestRouteSelection:
    """Tests for keyword-based route selection."""

    @pytest.mark.parametrize(
        "model, expected",
        [
            ("claude-3-5-sonnet-20241022", "anthropic"),
            ("anthropic/claude-3-opus", "anthropic"),
            ("openai/gpt-4", "openrouter"),
            ("mistralai/mistral-large", "openrouter"),
            ("Claude-3", "openrouter"),
            (None, "openrouter"),
            ("", "openrouter"),
        ],
    )
    def test_select(self, router, model, expected):
        """Test model ids are matched by case-sensitive substring."""
        assert router.select(model).name == expected

    def test_default_route_must_not_have_keyword(self):
        """Test a keyword on the default route is refused."""
        with pytest.raises(ValueError):
            ResponseRouter(default=Route(name="x", backend=StubBackend(), keyword="x"))

    def test_registered_route_needs_keyword(self, router):
        """Test keyword routes must have a keyword."""
        with pytest.raises(ValueError):
            router.register(Route(name="y", backend=StubBackend()))

    def test_routes_lists_default_last(self, router):
        """Test the default route comes after keyword routes."""
        assert [r.name for r in router.routes] == ["anthropic", "openrouter"]


class TestRouting:
    """Tests for answering through the router."""

    @pytest.mark.asyncio
    async def test_default_route_passes_model_through(self, router, openrouter_backend):
        """Test the requested model id reaches the default backend unchanged."""
        response = await router.route("What is 2+2?", "Add 2 and 2.", "", "openai/gpt-4")

        assert response == "4"
        assert openrouter_backend.last_call.model == "openai/gpt-4"

    @pytest.mark.asyncio
    async def test_no_model_uses_backend_default(self, router, openrouter_backend):
        """Test an absent model id is left for the backend to fill in."""
        await router.route("q", "r")
        assert openrouter_backend.last_call.model is None

    @pytest.mark.asyncio
    async def test_claude_route_uses_fixed_model(self, router, anthropic_backend, openrouter_backend):
        """Test Anthropic gets its configured model regardless of the requested id."""
        response = await router.route("q", "r", "", "anthropic/claude-3-opus")

        assert response == "Four."
        assert anthropic_backend.last_call.model == "claude-3-5-sonnet-20241022"
        assert openrouter_backend.call_count == 0

    @pytest.mark.asyncio
    async def test_prompt_without_history(self, router, openrouter_backend):
        """Test the combined prompt layout without prior turns."""
        await router.route("What is 2+2?", "Add 2 and 2.")

        assert openrouter_backend.last_call.prompt == (
            "Current question: <question>What is 2+2?</question>\n\n"
            "<thinking>Add 2 and 2.</thinking>\n\n"
        )

    @pytest.mark.asyncio
    async def test_prompt_with_history(self, router, openrouter_backend):
        """Test prior turns precede the current question."""
        history = "Question: q1\nReasoning: r1\nAnswer: a1"
        await router.route("q2", "r2", history)

        assert openrouter_backend.last_call.prompt == (
            "Previous conversation:\n" + history + "\n\n"
            "Current question: <question>q2</question>\n\n"
            "<thinking>r2</thinking>\n\n"
        )

    @pytest.mark.asyncio
    async def test_same_prompt_for_every_backend(self, router, openrouter_backend, anthropic_backend):
        """Test both routes receive an identical combined prompt."""
        await router.route("q", "r", "h", "openai/gpt-4")
        await router.route("q", "r", "h", "claude-3-haiku")

        assert openrouter_backend.last_call.prompt == anthropic_backend.last_call.prompt

    @pytest.mark.asyncio
    async def test_backend_error_propagates(self):
        """Test backend errors reach the caller unchanged."""
        router = ResponseRouter(default=Route(
            name="openrouter",
            backend=StubBackend(error=BackendNotConfiguredError("no key")),
        ))

        with pytest.raises(BackendNotConfiguredError):
            await router.route("q", "r")

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self):
        """Test non-RAT errors become BackendError."""
        router = ResponseRouter(default=Route(
            name="openrouter",
            backend=StubBackend(name="openrouter", error=KeyError("choices")),
        ))

        with pytest.raises(BackendError) as exc_info:
            await router.route("q", "r")

        assert exc_info.value.context["stage"] == "response"
