from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .models import CompletionRequest, CompletionResponse

# Called with ("request" | "response", verbatim body)
WireObserver = Callable[[str, str], None]


class CompletionProvider(ABC):
    """Abstract base class for completion clients.

    This module hides the design decision of which completion endpoint to use.
    Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Wire format conversion
    - Mapping transport and API failures onto chatterm.errors

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            response = await client.complete(request)
        # Automatically cleaned up
    """

    _wire_observer: WireObserver | None = None

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Send a request and return the parsed response.

        Args:
            request: Fully formed request carrying the whole conversation

        Returns:
            CompletionResponse with at least one candidate and usage accounting

        Raises:
            ConfigurationError: Credential could not be loaded
            AuthenticationError: Credential rejected by the server
            TransportError: Connection, timeout or DNS failure
            RemoteAPIError: Server returned an error payload
            ResponseParseError: Response body had an unexpected shape
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    def set_wire_observer(self, observer: WireObserver | None) -> None:
        """Set the observer that receives raw request and response bodies.

        Args:
            observer: Callable(direction: str, body: str), or None to detach
        """
        self._wire_observer = observer

    def _observe(self, direction: str, body: str) -> None:
        """Send a raw body to the observer if one is set."""
        if self._wire_observer is not None:
            self._wire_observer(direction, body)

    async def __aenter__(self) -> "CompletionProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            # Suppress harmless cleanup errors from httpx/anyio
            if "Event loop is closed" not in str(e):
                raise
