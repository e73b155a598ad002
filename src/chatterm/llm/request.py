"""Request assembly.

Turns a transcript snapshot into a CompletionRequest. The remote API keeps
no state between calls, so every request carries the whole conversation.
"""

from collections.abc import Sequence

from ..errors import InvalidRequestError
from .models import ChatMessage, CompletionRequest, GenerationParams


def build_request(
    snapshot: Sequence[ChatMessage],
    model_id: str,
    params: GenerationParams | None = None
) -> CompletionRequest:
    """Build a completion request from a transcript snapshot.

    Pure function: the same snapshot, model and params always produce an
    equal request.

    Args:
        snapshot: Ordered messages since the last clear
        model_id: Model identifier sent as the `model` field
        params: Generation parameters (defaults when None)

    Returns:
        Immutable CompletionRequest holding a copy of the snapshot

    Raises:
        InvalidRequestError: If the model id is empty, the snapshot is empty,
            or the snapshot holds something other than a ChatMessage
    """
    if not model_id:
        raise InvalidRequestError("model identifier must not be empty")

    messages = tuple(snapshot)
    if not messages:
        raise InvalidRequestError("cannot send an empty conversation")

    for position, message in enumerate(messages):
        if not isinstance(message, ChatMessage):
            raise InvalidRequestError(
                f"item {position} is {type(message).__name__}, expected ChatMessage"
            )

    return CompletionRequest(
        model=model_id,
        messages=messages,
        params=params or GenerationParams()
    )
