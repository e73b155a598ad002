"""Error taxonomy for chatterm.

Every failure a turn can hit derives from ChatError. Each error names the
step that failed so the chat loop can report it without inspecting types.
"""


class ChatError(Exception):
    """Base class for chat errors."""

    step = "chat"

    def is_retryable(self) -> bool:
        """Override in subclasses to control retry classification."""
        return False


class ConfigurationError(ChatError):
    """Credential or configuration missing/unreadable (non-retryable)."""

    step = "credential load"


class InvalidRequestError(ChatError, ValueError):
    """Request could not be assembled from the transcript (non-retryable)."""

    step = "request build"


class CompletionError(ChatError):
    """Base class for errors raised by a completion client."""


class AuthenticationError(CompletionError):
    """Credential rejected by the remote API (non-retryable)."""

    step = "authentication"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(f"Authentication failed: {message}")
        self.status_code = status_code


class TransportError(CompletionError):
    """Network or connection error (retryable)."""

    step = "network send"

    def __init__(self, message: str):
        super().__init__(f"Network error: {message}")

    def is_retryable(self) -> bool:
        return True


class RemoteAPIError(CompletionError):
    """Remote API returned an error payload."""

    step = "remote API"

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"API request unsuccessful (code: {status_code}): {detail}")
        self.status_code = status_code
        self.detail = detail

    def is_retryable(self) -> bool:
        # Rate limits and server-side failures may succeed on a later attempt
        return self.status_code == 429 or self.status_code >= 500


class ResponseParseError(CompletionError):
    """Response body does not match the expected protocol (non-retryable)."""

    step = "response decode"

    def __init__(self, message: str, body: str | None = None):
        super().__init__(f"Protocol mismatch: {message}")
        self.body = body
