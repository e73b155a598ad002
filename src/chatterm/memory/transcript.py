"""In-memory conversation transcript.

The remote API is stateless, so the transcript is the conversation's only
memory. Data is lost when the application exits.
"""

from collections.abc import Iterator

from ..llm.models import ChatMessage, Role


class Transcript:
    """Ordered history of messages since the last clear.

    Order is chronological and is exactly the order sent to the API.
    Messages are never reordered or deduplicated.
    """

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []

    def append(self, message: ChatMessage) -> None:
        """Add a message as the new last element."""
        self._messages.append(message)

    def add_user_text(self, text: str) -> ChatMessage:
        """Structure a line of user text as a message and store it.

        Args:
            text: The user's input

        Returns:
            The appended message
        """
        message = ChatMessage(role=Role.USER, content=text)
        self.append(message)
        return message

    def pop_last(self) -> ChatMessage | None:
        """Remove and return the last message, or None if empty."""
        if not self._messages:
            return None
        return self._messages.pop()

    def clear(self) -> None:
        """Remove all context by clearing the history."""
        self._messages.clear()

    def snapshot(self) -> tuple[ChatMessage, ...]:
        """Return a read-only, ordered view of the current messages."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"Transcript(messages={len(self._messages)})"
