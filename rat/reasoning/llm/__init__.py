"""
LLM Module

Contains all model backend adapters.
"""

from rat.reasoning.llm.anthropic_adapter import UNEXPECTED_RESPONSE_TYPE, AnthropicAdapter
from rat.reasoning.llm.base import BaseLLMAdapter
from rat.reasoning.llm.openai_adapter import OpenAIAdapter
from rat.reasoning.llm.stub_adapter import StubBackend

__all__ = [
    "AnthropicAdapter",
    "BaseLLMAdapter",
    "OpenAIAdapter",
    "StubBackend",
    "UNEXPECTED_RESPONSE_TYPE",
]
