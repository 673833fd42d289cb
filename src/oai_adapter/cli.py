#!/usr/bin/env python3
"""
oai-adapter Command Line Interface

Usage:
    oai-adapter stream PROMPT [--system TEXT] [--json]   # Stream a chat completion
    oai-adapter complete PROMPT                          # Single completion
    oai-adapter model                                    # Show model metadata

Connection options (--base-url, --api-key, --model, ...) override the
OAI_* / OPENAI_API_KEY environment variables.
"""

import argparse
import asyncio
import sys
from typing import Any, Optional

from openai import OpenAIError
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from oai_adapter.adapters import AdapterError, ApiStreamTextChunk, ApiStreamUsageChunk, OpenAiHandler
from oai_adapter.config.settings import Settings
from oai_adapter.log import configure_logging

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."


class CLI:
    """CLI helper class."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_text(self, text: str):
        self.console.print(text, end="", markup=False, highlight=False, soft_wrap=True)

    def print_error(self, msg: str):
        self.console.print(f"[red]Error:[/red] {escape(msg)}", highlight=False)

    def print_info(self, msg: str):
        self.console.print(f"[blue]{escape(msg)}[/blue]", highlight=False)


def build_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, overridden by CLI options."""
    overrides: dict[str, Any] = {
        "base_url": args.base_url,
        "api_key": args.api_key,
        "model_id": args.model,
        "azure_api_version": args.azure_api_version,
        "log_level": args.log_level,
    }
    if args.no_usage:
        overrides["include_stream_options"] = False
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


async def stream_message(handler: OpenAiHandler, args: argparse.Namespace, cli: CLI) -> None:
    messages = [{"role": "user", "content": args.prompt}]
    usage: Optional[ApiStreamUsageChunk] = None

    try:
        async for chunk in handler.create_message(args.system, messages):
            if args.json:
                cli.console.print_json(data=chunk.to_dict(), indent=None)
            elif isinstance(chunk, ApiStreamTextChunk):
                cli.print_text(chunk.text)
            else:
                usage = chunk
    finally:
        await handler.close()

    if not args.json:
        cli.console.print()
        if usage is not None:
            cli.print_info(
                f"tokens: {usage.input_tokens} in / {usage.output_tokens} out"
            )


async def complete_prompt(handler: OpenAiHandler, args: argparse.Namespace, cli: CLI) -> None:
    try:
        text = await handler.complete_prompt(args.prompt)
    finally:
        await handler.close()
    cli.print_text(text)
    cli.console.print()


def show_model(handler: OpenAiHandler, cli: CLI) -> None:
    model = handler.get_model()

    table = Table(title=f"Model: {model.id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in model.info.to_dict().items():
        table.add_row(key, str(value))
    table.add_row("transport", handler.transport.mode)
    cli.console.print(table)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oai-adapter",
        description="Talk to an OpenAI-compatible chat completions API",
    )
    parser.add_argument("--base-url", help="API base URL (OAI_BASE_URL)")
    parser.add_argument("--api-key", help="API key (OPENAI_API_KEY)")
    parser.add_argument("--model", help="Model or deployment id (OAI_MODEL_ID)")
    parser.add_argument("--azure-api-version", help="Azure API version (OAI_AZURE_API_VERSION)")
    parser.add_argument(
        "--no-usage",
        action="store_true",
        help="Do not request usage accounting in streamed responses",
    )
    parser.add_argument("--log-level", help="Logging level (OAI_LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    stream_parser = subparsers.add_parser("stream", help="Stream a chat completion")
    stream_parser.add_argument("prompt", help="User message")
    stream_parser.add_argument("--system", default=DEFAULT_SYSTEM_PROMPT, help="System prompt")
    stream_parser.add_argument("--json", action="store_true", help="Print raw events as JSON")

    complete_parser = subparsers.add_parser("complete", help="Run a single completion")
    complete_parser.add_argument("prompt", help="User message")

    subparsers.add_parser("model", help="Show the configured model")

    return parser


def main(argv: Optional[list[str]] = None, console: Optional[Console] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    cli = CLI(console)

    try:
        settings = build_settings(args)
    except ValidationError as e:
        cli.print_error(str(e))
        return 1

    configure_logging(settings.log_level, json_output=False)

    try:
        handler = OpenAiHandler(settings)
        if args.command == "stream":
            asyncio.run(stream_message(handler, args, cli))
        elif args.command == "complete":
            asyncio.run(complete_prompt(handler, args, cli))
        else:
            show_model(handler, cli)
    except (AdapterError, OpenAIError) as e:
        cli.print_error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
