"""Provider factory functions for CLI.

Centralizes creation of the configuration and the completion client from
environment variables and command-line overrides.
Hides configuration details from command implementations.
"""

import os
import sys
from typing import Any

from loguru import logger

from ..config import ChatConfig
from ..llm import CompletionProvider, create_completion_client

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in _TRUTHY


def load_config(**overrides: Any) -> ChatConfig:
    """Build the chat configuration from environment variables.

    Args:
        **overrides: Values from command-line options; None means "not given"

    Returns:
        Validated ChatConfig

    Raises:
        pydantic.ValidationError: If a value is out of range or malformed

    Environment variables:
        CHATTERM_PROVIDER: Provider type (openai, deepseek; default: openai)
        CHATTERM_MODEL: Model name (default: gpt-3.5-turbo / deepseek-chat)
        CHATTERM_BASE_URL: Override the provider's API base URL
        CHATTERM_TEMPERATURE: Sampling temperature (default: 0.7)
        CHATTERM_MAX_TOKENS: Maximum tokens to generate (default: unset)
        CHATTERM_TIMEOUT: Transport timeout in seconds (default: 60)
        CHATTERM_API_KEY_FILE: Key file used when the key env var is unset
            (default: open_ai_auth_key.txt)
        CHATTERM_VERBOSE: Print raw request/response bodies (1/true/yes/on)
        CHATTERM_FAILED_TURN_POLICY: retain or discard (default: retain)
    """
    values: dict[str, Any] = {
        "provider": os.getenv("CHATTERM_PROVIDER"),
        "model": os.getenv("CHATTERM_MODEL"),
        "base_url": os.getenv("CHATTERM_BASE_URL"),
        "temperature": os.getenv("CHATTERM_TEMPERATURE"),
        "max_tokens": os.getenv("CHATTERM_MAX_TOKENS"),
        "timeout": os.getenv("CHATTERM_TIMEOUT"),
        "api_key_file": os.getenv("CHATTERM_API_KEY_FILE"),
        "verbose": _env_flag("CHATTERM_VERBOSE"),
        "failed_turn_policy": os.getenv("CHATTERM_FAILED_TURN_POLICY"),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return ChatConfig(**{key: value for key, value in values.items() if value is not None})


def get_client(config: ChatConfig) -> CompletionProvider:
    """Create the completion client described by config.

    The credential is not read here; the client resolves it on every call.
    """
    return create_completion_client(
        config.provider,
        credentials=config.credential_source(),
        model=config.model,
        base_url=config.base_url,
        timeout=config.timeout,
    )


def setup_logging(verbose: bool = False) -> None:
    """Route loguru output to stderr.

    Level is DEBUG in verbose mode and WARNING otherwise, unless
    CHATTERM_LOG_LEVEL is set.
    """
    level = os.getenv("CHATTERM_LOG_LEVEL", "DEBUG" if verbose else "WARNING").upper()
    logger.remove()
    logger.add(sys.stderr, level=level)
