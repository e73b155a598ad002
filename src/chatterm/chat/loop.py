"""Interactive chat loop.

Reads lines from the user, interprets the control commands and otherwise
sends the whole transcript to the completion client, printing each reply.
"""

from collections.abc import Callable
from enum import Enum

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..config import ChatConfig, FailedTurnPolicy
from ..errors import ChatError
from ..llm import CompletionProvider, CompletionResponse, WireObserver, build_request
from ..memory import Transcript

PROMPT = "> "
REPLY_LABEL = "GPT"


class ChatState(str, Enum):
    """States of the chat loop."""

    AWAITING_INPUT = "awaiting_input"
    DISPATCHING = "dispatching"
    EXITED = "exited"


class ChatLoop:
    """Chat session holding the transcript and the client that sends it.

    Only one request is ever in flight; the loop waits for it to finish
    before reading the next line.
    """

    def __init__(
        self,
        client: CompletionProvider,
        config: ChatConfig | None = None,
        transcript: Transcript | None = None,
        console: Console | None = None,
        read_line: Callable[[str], str] | None = None
    ) -> None:
        """Initialize the loop.

        Args:
            client: Completion client used for every turn
            config: Chat configuration (defaults when None)
            transcript: Transcript to continue (new and empty when None)
            console: Rich console for output
            read_line: Callable(prompt) -> line; defaults to console.input.
                Raises EOFError when the input stream ends.
        """
        self._client = client
        self._config = config or ChatConfig()
        self._transcript = transcript if transcript is not None else Transcript()
        self._console = console or Console()
        self._read_line = read_line or self._console.input
        self._state = ChatState.AWAITING_INPUT

    @property
    def state(self) -> ChatState:
        return self._state

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def help_text(self) -> str:
        return (
            f"Enter text. Enter `{self._config.clear_command}` to clear the chat history "
            f"and `{self._config.quit_command}` to exit."
        )

    async def chat(self, text: str) -> CompletionResponse:
        """Run one turn.

        Adds the user's text to the transcript and sends the whole transcript
        so the model can respond within the context of the conversation.

        Args:
            text: The user's message

        Returns:
            The parsed response; its reply is already in the transcript

        Raises:
            ChatError: If the turn failed. No assistant message is added and
                the user's message is kept or removed per failed_turn_policy.
        """
        self._transcript.add_user_text(text)
        self._state = ChatState.DISPATCHING
        try:
            request = build_request(
                self._transcript.snapshot(),
                self._config.model,
                self._config.generation_params
            )
            response = await self._client.complete(request)
        except ChatError:
            if self._config.failed_turn_policy is FailedTurnPolicy.DISCARD:
                self._transcript.pop_last()
            raise
        finally:
            self._state = ChatState.AWAITING_INPUT

        self._transcript.append(response.reply)
        return response

    async def handle_line(self, line: str) -> ChatState:
        """Apply one line of input and return the resulting state."""
        if self._state is ChatState.EXITED:
            return self._state

        text = line.strip()

        if text == self._config.quit_command:
            self._exit()
            return self._state

        if text == self._config.clear_command:
            self._console.print("  [Clearing chat history]", style="dim")
            self._transcript.clear()
            return self._state

        if not text:
            self._print_help()
            return self._state

        self._console.print(f"  [Sending chat to {self._config.model}...]", style="dim", markup=False)
        try:
            response = await self.chat(text)
        except ChatError as e:
            logger.debug("Turn failed at {}: {}", e.step, e)
            self._console.print(
                Text(f"  [Error during {e.step}] {e}", style="red"),
                soft_wrap=True
            )
        else:
            self._print_reply(response)

        return self._state

    async def run(self) -> None:
        """Read and handle lines until the quit command or end of input."""
        self._print_help()
        try:
            while self._state is not ChatState.EXITED:
                try:
                    line = self._read_line(PROMPT)
                except (EOFError, KeyboardInterrupt, UnicodeDecodeError):
                    self._console.print()
                    self._exit()
                    break
                await self.handle_line(line)
        finally:
            await self._client.close()

    def _exit(self) -> None:
        self._console.print("  [Exiting]", style="dim")
        self._state = ChatState.EXITED

    def _print_help(self) -> None:
        self._console.print(f"{PROMPT}{self.help_text}", markup=False)

    def _print_reply(self, response: CompletionResponse) -> None:
        tokens = response.usage.total_tokens
        self._console.print(
            Text.assemble(
                (REPLY_LABEL, "bold green"),
                f" [{tokens:,} tokens used for this context and prompt]: ",
                response.reply.content,
            ),
            soft_wrap=True
        )


def wire_printer(console: Console) -> WireObserver:
    """Build an observer that prints raw request/response bodies verbatim."""

    def _print(direction: str, body: str) -> None:
        console.print(Panel(Text(body), title=f"{direction.title()} body", title_align="left", border_style="dim"))

    return _print
