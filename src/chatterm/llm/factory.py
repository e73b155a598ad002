from typing import Any

from .base import CompletionProvider
from .providers import OpenAICompletionClient

DEEPSEEK_BASE_URL = "https://api.deepseek.com"
DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"


def create_completion_client(provider: str, **config: Any) -> CompletionProvider:
    """Create a completion client instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type ('openai', 'deepseek')
        **config: Provider-specific configuration
            For OpenAI:
                - credentials: CredentialSource (required)
                - model: str (default: 'gpt-3.5-turbo')
                - base_url: str | None
                - timeout: float (default: 60.0)
            For DeepSeek (OpenAI-compatible endpoint):
                - credentials: CredentialSource (required)
                - model: str (default: 'deepseek-chat')
                - base_url: str (default: 'https://api.deepseek.com')
                - timeout: float (default: 60.0)

    Returns:
        Initialized completion client

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_completion_client(
        ...     "openai",
        ...     credentials=CredentialSource(),
        ...     model="gpt-3.5-turbo"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "openai":
        if "credentials" not in config:
            raise TypeError("OpenAI provider requires 'credentials' in config")
        return OpenAICompletionClient(**config)

    if provider_lower == "deepseek":
        if "credentials" not in config:
            raise TypeError("DeepSeek provider requires 'credentials' in config")
        config.setdefault("model", DEEPSEEK_DEFAULT_MODEL)
        if config.get("base_url") is None:
            config["base_url"] = DEEPSEEK_BASE_URL
        return OpenAICompletionClient(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openai', 'deepseek'"
    )
