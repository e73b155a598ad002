"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console

from ..chat import ChatLoop, wire_printer
from ..config import FailedTurnPolicy
from .providers import get_client, load_config, setup_logging

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chatterm",
    help="Chat with a language model; the whole conversation is resent every turn",
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def chat(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Completion provider: openai or deepseek"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model to chat with"
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Override the provider's API base URL"
    ),
    temperature: float | None = typer.Option(
        None,
        "--temperature",
        "-t",
        help="Sampling temperature (0.0 to 2.0)"
    ),
    max_tokens: int | None = typer.Option(
        None,
        "--max-tokens",
        help="Maximum tokens per reply"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds"
    ),
    key_file: Path | None = typer.Option(
        None,
        "--key-file",
        help="File holding the API key, read when the key variable is unset"
    ),
    on_failure: FailedTurnPolicy | None = typer.Option(
        None,
        "--on-failure",
        help="Keep (retain) or drop (discard) your message when a turn fails"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print full request and response bodies"
    )
):
    """Interactive chat. Enter `c` to clear the history and `q` to exit."""
    try:
        config = load_config(
            provider=provider,
            model=model,
            base_url=base_url,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            api_key_file=key_file,
            failed_turn_policy=on_failure,
            verbose=verbose or None,
        )
    except ValidationError as e:
        console.print("[red]Error: invalid configuration[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(code=1)

    setup_logging(config.verbose)

    client = get_client(config)
    if config.verbose:
        client.set_wire_observer(wire_printer(console))

    loop = ChatLoop(client, config=config, console=console)

    try:
        asyncio.run(loop.run())
    except KeyboardInterrupt:
        console.print("\n  [Exiting]", style="dim")
    except Exception as e:
        console.print(f"Error: {e}", style="red", markup=False)
        import traceback
        console.print(traceback.format_exc(), style="dim", markup=False)
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
