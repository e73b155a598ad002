from .base import CompletionProvider, WireObserver
from .factory import create_completion_client
from .models import (
    ChatMessage,
    Choice,
    CompletionRequest,
    CompletionResponse,
    GenerationParams,
    Role,
    Usage,
)
from .providers import OpenAICompletionClient
from .request import build_request

__all__ = [
    "CompletionProvider",
    "WireObserver",
    "create_completion_client",
    "build_request",
    "ChatMessage",
    "Choice",
    "CompletionRequest",
    "CompletionResponse",
    "GenerationParams",
    "Role",
    "Usage",
    "OpenAICompletionClient",
]
