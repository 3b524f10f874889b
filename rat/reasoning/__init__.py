"""
Reasoning Core Module

Contains backend adapters, prompt management and the two pipeline stages:
reasoning extraction and response routing.
"""

from rat.reasoning.extractor import ReasoningExtractor
from rat.reasoning.llm import AnthropicAdapter, BaseLLMAdapter, OpenAIAdapter, StubBackend
from rat.reasoning.prompts import PromptRegistry, PromptTemplate
from rat.reasoning.router import ResponseRouter, Route

__all__ = [
    # Backend adapters
    "AnthropicAdapter",
    "BaseLLMAdapter",
    "OpenAIAdapter",
    "StubBackend",
    # Prompts
    "PromptRegistry",
    "PromptTemplate",
    # Stages
    "ReasoningExtractor",
    "ResponseRouter",
    "Route",
]
