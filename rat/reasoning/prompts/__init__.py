"""
Prompt Module

Templates and versioning for the stage prompts.
"""

from rat.reasoning.prompts.template import (
    PromptRegistry,
    PromptTemplate,
    build_reasoning_prompt,
    build_response_prompt,
    get_prompt_registry,
)

__all__ = [
    "PromptRegistry",
    "PromptTemplate",
    "build_reasoning_prompt",
    "build_response_prompt",
    "get_prompt_registry",
]
