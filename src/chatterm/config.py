"""Chat configuration.

A single immutable value built once at startup and passed explicitly to the
components that need it.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .credentials import DEFAULT_API_KEY_FILE, CredentialSource
from .llm.models import GenerationParams

# Per-provider defaults for fields the user did not set
PROVIDER_DEFAULTS: dict[str, dict[str, str]] = {
    "openai": {"model": "gpt-3.5-turbo", "api_key_env": "OPENAI_API_KEY"},
    "deepseek": {"model": "deepseek-chat", "api_key_env": "DEEPSEEK_API_KEY"},
}

QUIT_COMMAND = "q"
CLEAR_COMMAND = "c"


class FailedTurnPolicy(str, Enum):
    """What happens to the user's message when its turn fails."""

    RETAIN = "retain"  # Keep it, the next input resends it
    DISCARD = "discard"  # Roll it back out of the transcript


class ChatConfig(BaseModel):
    """Configuration for a chat session."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default="openai", description="Completion provider name")
    model: str = Field(default="", description="Model identifier sent with every request")
    base_url: str | None = Field(default=None, description="Override the provider's API base URL")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)
    timeout: float = Field(default=60.0, gt=0, description="Transport timeout in seconds")
    api_key_env: str = Field(default="", description="Environment variable holding the API key")
    api_key_file: Path = Field(default=Path(DEFAULT_API_KEY_FILE))
    verbose: bool = Field(default=False, description="Print raw request/response bodies")
    failed_turn_policy: FailedTurnPolicy = FailedTurnPolicy.RETAIN
    quit_command: str = Field(default=QUIT_COMMAND, min_length=1)
    clear_command: str = Field(default=CLEAR_COMMAND, min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _fill_provider_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        provider = str(data.get("provider") or "openai").lower()
        if provider not in PROVIDER_DEFAULTS:
            raise ValueError(
                f"Unsupported provider: {provider}. "
                f"Supported providers: {', '.join(sorted(PROVIDER_DEFAULTS))}"
            )
        defaults = PROVIDER_DEFAULTS[provider]
        filled = {**data, "provider": provider}
        for key, value in defaults.items():
            if not filled.get(key):
                filled[key] = value
        return filled

    @model_validator(mode="after")
    def _check_commands(self) -> "ChatConfig":
        if self.quit_command == self.clear_command:
            raise ValueError("quit and clear commands must differ")
        return self

    @property
    def generation_params(self) -> GenerationParams:
        return GenerationParams(temperature=self.temperature, max_tokens=self.max_tokens)

    def credential_source(self) -> CredentialSource:
        """Build the credential source described by this config."""
        return CredentialSource(env_var=self.api_key_env, key_file=self.api_key_file)
