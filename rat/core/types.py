"""
Core Types and Data Structures

Defines the fundamental types used throughout the RAT server.
These are intentionally simple, immutable where possible, and serializable.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic import ValidationError as PydanticValidationError

from rat.core.exceptions import ValidationError

DEFAULT_MODEL_LABEL = "default"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MessageRole(str, Enum):
    """Role of a message in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """
    A single chat message handed to a backend.

    Immutable by design. Create new messages rather than modifying.
    """

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str


class StreamChunk(BaseModel):
    """
    One decoded item of a streaming completion.

    Adapters translate vendor payloads into this shape, so consumers
    never inspect provider-specific fields. `reasoning` carries the
    side-channel chain-of-thought fragment; `content` the visible text.
    """

    model_config = ConfigDict(frozen=True)

    content: str | None = None
    reasoning: str | None = None


class Turn(BaseModel):
    """
    One completed prompt/reasoning/response cycle.

    Owned by the ContextStore; never modified after creation.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=_utcnow)
    prompt: str
    reasoning: str
    response: str
    model: str = DEFAULT_MODEL_LABEL


class GenerateRequest(BaseModel):
    """
    Validated arguments of the generate_response tool.

    Wire names are camelCase; attributes are snake_case.
    Unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    prompt: StrictStr
    model: StrictStr | None = None
    show_reasoning: StrictBool = Field(default=False, alias="showReasoning")
    clear_context: StrictBool = Field(default=False, alias="clearContext")

    @classmethod
    def from_arguments(cls, arguments: Any) -> "GenerateRequest":
        """
        Build a request from raw tool arguments.

        Raises:
            ValidationError: If the arguments are not a well-formed mapping
        """
        if not isinstance(arguments, dict):
            raise ValidationError(
                "Invalid generate_response arguments",
                context={"errors": ["arguments must be an object"]},
            )
        try:
            return cls.model_validate(arguments)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid generate_response arguments",
                context={"errors": [err["msg"] for err in e.errors()]},
                cause=e,
            )


class GenerateResult(BaseModel):
    """Text payload returned to the caller."""

    text: str
