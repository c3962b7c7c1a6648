"""
CLI for Browser Agent.

Provides the command-line interface using argparse.
"""

import argparse
import asyncio
import sys
from typing import Optional

from rich.console import Console

from . import __version__
from .agent import AgentResult, run_agent
from .browser_manager import SharedBrowser
from .config import AgentConfig, DEFAULTS
from .llm_client import create_completion_client
from .logger import RunLogger, setup_logging
from .screenshots import ScreenshotStore


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="browser-agent",
        description="Browser Agent - let a completion model drive a headless browser.",
        epilog="""
Examples:
  # Serve POST /agent on port 3000
  browser-agent serve

  # Answer one query from the terminal
  browser-agent run "Open example.com and tell me the title"

  # Use an OpenAI-compatible endpoint and watch the browser
  browser-agent run "Find the Python release notes" --provider openai --model gpt-4o-mini --headed
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Browser Agent {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Options shared by both commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--provider",
        type=str,
        default=None,
        help=f"Completion provider: google, openai or lm_studio (default: {DEFAULTS['provider']})",
    )
    common.add_argument(
        "--model",
        type=str,
        default=None,
        help=f"Model identifier (default: {DEFAULTS['model']})",
    )
    common.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless",
    )
    common.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Stop after this many commands without an answer (default: unbounded)",
    )
    common.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose logging",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        parents=[common],
        help="Run the HTTP server",
    )
    serve_parser.add_argument(
        "--host",
        type=str,
        default=None,
        help=f"Bind address (default: {DEFAULTS['host']})",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help=f"Port (default: {DEFAULTS['port']})",
    )

    run_parser = subparsers.add_parser(
        "run",
        parents=[common],
        help="Answer a single query in-process",
    )
    run_parser.add_argument(
        "query",
        type=str,
        help="The question or task in natural language",
    )
    run_parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Base address used in screenshot links (default: http://localhost:<port>)",
    )

    return parser


def _config_from_args(args: argparse.Namespace) -> AgentConfig:
    return AgentConfig.from_cli_args(
        provider=args.provider,
        model=args.model,
        headless=False if args.headed else None,
        max_iterations=args.max_iterations,
        host=getattr(args, "host", None),
        port=getattr(args, "port", None),
        debug=args.debug,
    )


def serve_command(args: argparse.Namespace) -> int:
    """Execute the serve command.

    Returns:
        Exit code
    """
    from .server import run_server

    config = _config_from_args(args)
    setup_logging(config.debug)
    run_server(config)
    return 0


async def _run_query(config: AgentConfig, query: str, base_url: str) -> AgentResult:
    browser = SharedBrowser(config)
    completion_client = create_completion_client(config)
    try:
        return await run_agent(
            query,
            config,
            completion_client,
            browser,
            screenshots=ScreenshotStore(config.screenshots_dir),
            base_url=base_url,
            run_logger=RunLogger(query, enable_console=True, runs_dir=config.runs_dir),
        )
    finally:
        await completion_client.close()
        await browser.close()


def run_command(args: argparse.Namespace) -> int:
    """Execute the run command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for an answer, non-zero for failure)
    """
    console = Console()

    config = _config_from_args(args)
    setup_logging(config.debug)

    is_valid, message = config.validate()
    if not is_valid:
        console.print(f"[bold red]Configuration error: {message}[/bold red]")
        return 2

    config.ensure_directories()
    base_url = args.base_url or f"http://localhost:{config.port}"

    try:
        result = asyncio.run(_run_query(config, args.query, base_url))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130

    return 0 if result.success else 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "serve":
            return serve_command(args)

        if args.command == "run":
            return run_command(args)
    except ValueError as e:
        Console().print(f"[bold red]Error: {e}[/bold red]")
        return 2

    # Unknown command
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
