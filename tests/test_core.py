"""
Tests for Core Types and Exceptions
"""

import pytest

from rat.core.exceptions import (
    BackendError,
    BackendRateLimitError,
    ExecutionError,
    RatError,
    ToolNotFoundError,
    ValidationError,
)
from rat.core.interfaces import CompletionBackend, StreamingBackend
from rat.core.types import GenerateRequest, Message, MessageRole, Turn
from rat.reasoning.llm.stub_adapter import StubBackend


class TestGenerateRequest:
    """Tests for tool argument validation."""

    def test_minimal(self):
        """Test only the prompt is required."""
        req = GenerateRequest.from_arguments({"prompt": "What is 2+2?"})
        assert req.prompt == "What is 2+2?"
        assert req.model is None
        assert req.show_reasoning is False
        assert req.clear_context is False

    def test_camel_case_flags(self):
        """Test wire names map onto attributes."""
        req = GenerateRequest.from_arguments({
            "prompt": "q",
            "model": "openai/gpt-4",
            "showReasoning": True,
            "clearContext": True,
        })
        assert req.model == "openai/gpt-4"
        assert req.show_reasoning is True
        assert req.clear_context is True

    def test_extra_keys_ignored(self):
        """Test unknown keys do not fail validation."""
        req = GenerateRequest.from_arguments({"prompt": "q", "temperature": 0.2})
        assert req.prompt == "q"

    def test_null_model_is_absent(self):
        """Test an explicit null model counts as no model."""
        assert GenerateRequest.from_arguments({"prompt": "q", "model": None}).model is None

    def test_empty_prompt_allowed(self):
        """Test an empty prompt string is still a string."""
        assert GenerateRequest.from_arguments({"prompt": ""}).prompt == ""

    @pytest.mark.parametrize(
        "arguments",
        [
            None,
            [],
            {},
            {"prompt": 42},
            {"prompt": "q", "model": 3},
            {"prompt": "q", "showReasoning": "yes"},
            {"prompt": "q", "clearContext": 1},
        ],
    )
    def test_invalid_arguments(self, arguments):
        """Test malformed arguments raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            GenerateRequest.from_arguments(arguments)

        assert exc_info.value.message == "Invalid generate_response arguments"
        assert exc_info.value.code == "INVALID_PARAMS"
        assert exc_info.value.context["errors"]


class TestTypes:
    """Tests for immutable value types."""

    def test_turn_defaults(self):
        """Test a turn gets a timestamp and the default model label."""
        turn = Turn(prompt="p", reasoning="r", response="a")
        assert turn.model == "default"
        assert turn.timestamp.tzinfo is not None

    def test_message_is_frozen(self):
        """Test messages cannot be modified."""
        msg = Message(role=MessageRole.USER, content="hi")
        with pytest.raises(Exception):
            msg.content = "bye"


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_codes(self):
        """Test each family carries its code."""
        assert ToolNotFoundError("x").code == "METHOD_NOT_FOUND"
        assert ValidationError("x").code == "INVALID_PARAMS"
        assert ExecutionError("x").code == "INTERNAL_ERROR"
        assert BackendError("x").code == "BACKEND_ERROR"

    def test_to_dict(self):
        """Test serialization includes code, message and context."""
        err = BackendError("down", context={"provider": "deepseek"})
        assert err.to_dict() == {
            "error": "BACKEND_ERROR",
            "message": "down",
            "context": {"provider": "deepseek"},
        }

    def test_cause_is_chained(self):
        """Test the cause is exposed as __cause__."""
        cause = RuntimeError("root")
        assert RatError("x", cause=cause).__cause__ is cause

    def test_rate_limit_retry_after(self):
        """Test rate limit errors keep the retry hint."""
        err = BackendRateLimitError("slow down", retry_after=2.0)
        assert err.retry_after == 2.0
        assert isinstance(err, BackendError)


class TestInterfaces:
    """Tests for backend protocols."""

    def test_stub_satisfies_both_protocols(self):
        """Test the stub backend is usable for either stage."""
        backend = StubBackend()
        assert isinstance(backend, CompletionBackend)
        assert isinstance(backend, StreamingBackend)
