from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ResponseParseError


class Role(str, Enum):
    """Role of a message sender."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")

    def to_wire(self) -> dict[str, str]:
        """Return the compact {role, content} wire form."""
        return {"role": self.role.value, "content": self.content}


class GenerationParams(BaseModel):
    """Optional sampling parameters sent with every request."""

    model_config = ConfigDict(frozen=True)

    temperature: float | None = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature (0.0 to 2.0)"
    )
    max_tokens: int | None = Field(
        default=None,
        gt=0,
        description="Maximum tokens to generate"
    )


class CompletionRequest(BaseModel):
    """A single chat-completion request.

    Built fresh from a transcript snapshot for every remote call and
    discarded once the call returns.
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Model identifier")
    messages: tuple[ChatMessage, ...] = Field(description="Full conversation, oldest first")
    params: GenerationParams = Field(default_factory=GenerationParams)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON body expected by the chat completions endpoint.

        Unset generation parameters are omitted so the server default applies.
        """
        body: dict[str, Any] = {
            "model": self.model,
            "messages": [msg.to_wire() for msg in self.messages],
        }
        body.update(self.params.model_dump(exclude_none=True))
        return body


class Usage(BaseModel):
    """Token usage reported by the remote API for one exchange."""

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class Choice(BaseModel):
    """One candidate completion."""

    model_config = ConfigDict(frozen=True)

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class CompletionResponse(BaseModel):
    """Parsed response from a chat completions endpoint."""

    model_config = ConfigDict(frozen=True)

    choices: tuple[Choice, ...] = Field(min_length=1)
    usage: Usage
    model: str | None = Field(default=None, description="Model that served the request")

    @property
    def reply(self) -> ChatMessage:
        """The first candidate's message, the only one the chat loop uses."""
        return self.choices[0].message

    @classmethod
    def from_wire(cls, body: str | bytes) -> "CompletionResponse":
        """Parse a raw response body.

        Raises:
            ResponseParseError: If the body is not JSON or has an unexpected shape
        """
        try:
            return cls.model_validate_json(body)
        except ValidationError as e:
            text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
            raise ResponseParseError(_describe(e), body=text) from e


def _describe(error: ValidationError) -> str:
    """Summarize the first validation failure as 'location: message'."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if first["type"] == "string_type" and location.endswith("message.content"):
        return "no content received"
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]
