#!/usr/bin/env python3
"""AI Compare CLI - run the relay server or a single comparison from the shell."""

import argparse
import asyncio
import json
import logging
import sys

import httpx

from ai_compare.errors import PromptValidationError
from ai_compare.relay import compare_impl
from ai_compare.schemas.compare import CompareResponse
from ai_compare.server import configure_logging, run
from ai_compare.settings import settings

logger = logging.getLogger(__name__)


async def run_compare(prompt: str) -> CompareResponse:
    """Run one comparison with a short-lived HTTP client."""
    async with httpx.AsyncClient() as http_client:
        return await compare_impl(prompt, http_client)


def _print_text(result: CompareResponse) -> None:
    for slot, text in result.model_dump(by_alias=True).items():
        print(f"## {slot}\n{text}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="AI Compare - send one prompt to three LLM providers",
        epilog='Examples:\n  ai-compare serve --port 8080\n  ai-compare ask "Explain recursion"\n  ai-compare ask --json "Hi"',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Increase logging verbosity (DEBUG level)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP relay")
    serve.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    serve.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")

    ask = subparsers.add_parser("ask", help="Compare a single prompt and print the results")
    ask.add_argument("prompt", help="Prompt to send to every provider")
    ask.add_argument("--json", action="store_true", dest="json_output", help="Output results as JSON")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0=success, 1=invalid prompt, 2=runtime error)
    """
    args = build_parser().parse_args(argv)
    log_level = configure_logging("DEBUG" if args.verbose else None)

    if args.command == "serve":
        run(host=args.host, port=args.port, log_level=log_level)
        return 0

    try:
        result = asyncio.run(run_compare(args.prompt))
    except PromptValidationError as e:
        logger.error(f"{e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 2
    except Exception as e:
        logger.error(f"{e}")
        return 2

    if args.json_output:
        print(json.dumps(result.model_dump(by_alias=True), indent=2))
    else:
        _print_text(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
