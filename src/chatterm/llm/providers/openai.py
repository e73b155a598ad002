import json
from typing import Any

import openai
from loguru import logger
from openai import AsyncOpenAI

from ...credentials import CredentialSource
from ...errors import (
    AuthenticationError,
    RemoteAPIError,
    ResponseParseError,
    TransportError,
)
from ..base import CompletionProvider
from ..models import CompletionRequest, CompletionResponse

DEFAULT_MODEL = "gpt-3.5-turbo"


def _status_detail(error: openai.APIStatusError) -> str:
    """Prefer the server's own error message over the SDK's summary."""
    body = error.body
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return error.message


def _connection_detail(error: openai.APIConnectionError) -> str:
    """Include the underlying transport failure when the SDK wrapped one."""
    cause = error.__cause__
    if cause is not None and str(cause):
        return f"{error.message} ({type(cause).__name__}: {cause})"
    return error.message


class OpenAICompletionClient(CompletionProvider):
    """Chat Completions client for OpenAI-compatible endpoints.

    Hidden design decisions:
    - OpenAI API client initialization (created lazily on first call)
    - Per-call credential resolution and bearer authentication
    - Raw body capture for the wire observer
    - Mapping SDK exceptions onto chatterm.errors

    SDK retries are disabled: a failed call is reported, never repeated.
    """

    def __init__(
        self,
        credentials: CredentialSource,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        timeout: float = 60.0,
        **client_kwargs: Any
    ):
        """Initialize the client.

        Args:
            credentials: Source queried for the API key on every call
            model: Default model name
            base_url: Optional custom API base URL
            timeout: Transport timeout in seconds
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._credentials = credentials
        self._model = model
        self._base_url = base_url
        self._timeout = timeout
        self._client_kwargs = client_kwargs
        self._client: AsyncOpenAI | None = None

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _client_for(self, api_key: str) -> AsyncOpenAI:
        """Return an SDK client that authenticates with api_key."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
                **self._client_kwargs
            )
            return self._client
        # Shares the connection pool, swaps only the bearer token
        return self._client.with_options(api_key=api_key)

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Send the whole conversation and parse the reply.

        Args:
            request: Request built from the current transcript snapshot

        Returns:
            Parsed CompletionResponse
        """
        api_key = self._credentials.resolve()
        client = self._client_for(api_key)

        body = request.to_wire()
        self._observe("request", json.dumps(body, indent=2, ensure_ascii=False))
        logger.debug(
            "Sending {} message(s) to model {}",
            len(request.messages),
            request.model
        )

        try:
            raw = await client.chat.completions.with_raw_response.create(**body)
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            self._observe("response", e.response.text)
            logger.warning("Credential rejected (status {})", e.status_code)
            raise AuthenticationError(_status_detail(e), status_code=e.status_code) from e
        except openai.APIStatusError as e:
            self._observe("response", e.response.text)
            logger.warning("API returned status {}", e.status_code)
            raise RemoteAPIError(e.status_code, _status_detail(e)) from e
        except openai.APIConnectionError as e:
            logger.warning("Transport failure: {}", e.message)
            raise TransportError(_connection_detail(e)) from e

        text = raw.http_response.text
        self._observe("response", text)

        try:
            response = CompletionResponse.from_wire(text)
        except ResponseParseError as e:
            logger.warning("Unexpected response body: {}", e)
            raise
        logger.debug("Received reply: {} tokens total", response.usage.total_tokens)
        return response

    async def close(self) -> None:
        """Close the OpenAI client.

        Note: Uses the OpenAI SDK's async close for proper cleanup.
        See: https://github.com/openai/openai-python#async-usage
        """
        if self._client is not None:
            await self._client.close()
            self._client = None
