"""
chatterm: a command-line chat client that resends the whole conversation
to a chat-completion endpoint on every turn.
"""

__version__ = "0.1.0"

from .chat import ChatLoop, ChatState
from .config import ChatConfig, FailedTurnPolicy
from .credentials import CredentialSource
from .errors import (
    AuthenticationError,
    ChatError,
    CompletionError,
    ConfigurationError,
    InvalidRequestError,
    RemoteAPIError,
    ResponseParseError,
    TransportError,
)
from .llm import ChatMessage, CompletionRequest, CompletionResponse, Role, build_request
from .memory import Transcript

__all__ = [
    "ChatLoop",
    "ChatState",
    "ChatConfig",
    "FailedTurnPolicy",
    "CredentialSource",
    "ChatError",
    "CompletionError",
    "ConfigurationError",
    "AuthenticationError",
    "InvalidRequestError",
    "RemoteAPIError",
    "ResponseParseError",
    "TransportError",
    "ChatMessage",
    "CompletionRequest",
    "CompletionResponse",
    "Role",
    "build_request",
    "Transcript",
]
