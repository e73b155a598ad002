"""Pytest configuration and shared fixtures."""
import io
import os
from collections.abc import Callable, Iterable

import pytest
from rich.console import Console

from chatterm.credentials import CredentialSource
from chatterm.errors import ConfigurationError
from chatterm.llm import (
    ChatMessage,
    CompletionProvider,
    CompletionRequest,
    CompletionResponse,
    Role,
)


def make_response(text: str, total_tokens: int = 10, prompt_tokens: int | None = None) -> CompletionResponse:
    """Build a successful response carrying one assistant reply."""
    prompt = prompt_tokens if prompt_tokens is not None else total_tokens // 2
    return CompletionResponse.model_validate({
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ],
        "usage": {
            "prompt_tokens": prompt,
            "completion_tokens": total_tokens - prompt,
            "total_tokens": total_tokens,
        },
        "model": "gpt-3.5-turbo",
    })


def wire_body(text: str | None, total_tokens: int = 10) -> dict:
    """Return a chat completions response body as the server sends it."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1677652288,
        "model": "gpt-3.5-turbo-0125",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 9, "completion_tokens": total_tokens - 9, "total_tokens": total_tokens},
    }


class StaticCredential(CredentialSource):
    """Credential with a fixed value."""

    def __init__(self, api_key: str):
        super().__init__()
        self._api_key = api_key

    def resolve(self) -> str:
        if not self._api_key:
            raise ConfigurationError("API key is empty")
        return self._api_key


class FakeCompletionClient(CompletionProvider):
    """In-memory completion client.

    Each call pops the next scripted outcome: a CompletionResponse is
    returned, an exception is raised. Every request is recorded.
    """

    def __init__(self, outcomes: Iterable[CompletionResponse | Exception] = ()):
        self._outcomes = list(outcomes)
        self.requests: list[CompletionRequest] = []
        self.closed = False

    def queue(self, outcome: CompletionResponse | Exception) -> None:
        self._outcomes.append(outcome)

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        self.requests.append(request)
        if not self._outcomes:
            raise AssertionError("FakeCompletionClient has no scripted outcome left")
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


def scripted_input(lines: Iterable[str]) -> Callable[[str], str]:
    """Return a read_line callable that replays lines, then raises EOFError."""
    remaining = iter(lines)

    def _read(prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return _read


@pytest.fixture
def console():
    """Return a console that records plain output."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def user_message():
    return ChatMessage(role=Role.USER, content="Hello")


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "deepseek": os.getenv("DEEPSEEK_API_KEY")
    }


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no chatterm or API key variables set."""
    for name in list(os.environ):
        if name.startswith("CHATTERM_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
