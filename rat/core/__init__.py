"""
Core Module

Contains fundamental types, exceptions and interfaces used across
all other modules of the RAT server.

The interfaces module defines protocols for cross-module communication,
preventing circular dependencies.
"""

from rat.core.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendNotConfiguredError,
    BackendRateLimitError,
    BackendResponseError,
    BackendTimeoutError,
    ConfigurationError,
    ExecutionError,
    MissingCredentialError,
    RatError,
    ToolNotFoundError,
    ValidationError,
)
from rat.core.interfaces import CompletionBackend, StreamingBackend
from rat.core.types import (
    DEFAULT_MODEL_LABEL,
    GenerateRequest,
    GenerateResult,
    Message,
    MessageRole,
    StreamChunk,
    Turn,
)

__all__ = [
    # Types
    "DEFAULT_MODEL_LABEL",
    "GenerateRequest",
    "GenerateResult",
    "Message",
    "MessageRole",
    "StreamChunk",
    "Turn",
    # Exceptions
    "BackendConnectionError",
    "BackendError",
    "BackendNotConfiguredError",
    "BackendRateLimitError",
    "BackendResponseError",
    "BackendTimeoutError",
    "ConfigurationError",
    "ExecutionError",
    "MissingCredentialError",
    "RatError",
    "ToolNotFoundError",
    "ValidationError",
    # Interfaces/Protocols
    "CompletionBackend",
    "StreamingBackend",
]
