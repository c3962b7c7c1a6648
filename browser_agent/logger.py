"""
Logging and artifact management for Browser Agent.

Handles logging setup, JSONL step logging and rich console output.
"""

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .types import Command, Fill, describe_command
from .utils import is_password_field, slugify


logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Route logging through rich.

    Args:
        debug: Log at DEBUG level instead of INFO
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=debug)],
        force=True,
    )


def _is_secret(command: Command) -> bool:
    return isinstance(command, Fill) and is_password_field(command.selector)


def sanitize_command(command: Command) -> dict[str, Any]:
    """Describe a command for logs, redacting typed passwords."""
    name, args = describe_command(command)
    if _is_secret(command):
        args["value"] = "[REDACTED]"
    return {"command": name, "args": args}


class RunLogger:
    """Manages logging and artifacts for a single agent request."""

    def __init__(
        self,
        query: str,
        enable_console: bool = False,
        runs_dir: Optional[Path] = None,
    ):
        """Initialize the run logger.

        Args:
            query: The user's query (used for directory naming)
            enable_console: Whether to print to console
            runs_dir: Parent directory for JSONL step logs; None disables them
        """
        self.query = query
        self.console = Console() if enable_console else None
        self.step_count = 0

        self.run_dir: Optional[Path] = None
        self.steps_file: Optional[Path] = None
        if runs_dir is not None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            self.run_dir = Path(runs_dir) / f"{timestamp}_{slugify(query)}"
            self.run_dir.mkdir(parents=True, exist_ok=True)
            self.steps_file = self.run_dir / "steps.jsonl"
            self.steps_file.touch()

    async def log_step(
        self,
        model_output: str,
        command: Command,
        observation: Optional[str] = None,
        error: Optional[str] = None,
    ) -> None:
        """Record one dispatch cycle.

        Args:
            model_output: Raw completion text
            command: The parsed command
            observation: The executor's result, if any
            error: Optional error message
        """
        self.step_count += 1
        sanitized = sanitize_command(command)
        logger.info(
            "Step %d: %s %s", self.step_count, sanitized["command"], sanitized["args"] or ""
        )

        if self.steps_file is None:
            return

        step_data = {
            "step": self.step_count,
            "timestamp": datetime.now().isoformat(),
            "model_output": "[REDACTED]" if _is_secret(command) else model_output,
            "parsed": sanitized,
            "observation": observation,
            "error": error,
        }

        line = json.dumps(step_data, ensure_ascii=False) + "\n"
        await asyncio.to_thread(self._append_line, line)

    def _append_line(self, line: str) -> None:
        with open(self.steps_file, "a", encoding="utf-8") as f:
            f.write(line)

    def print_header(self) -> None:
        """Print the run header to console."""
        logger.info("Agent request started: %s", self.query)
        if not self.console:
            return

        self.console.print()
        self.console.print(Panel(
            f"[bold cyan]Query:[/bold cyan] {self.query}",
            title="Browser Agent",
            border_style="cyan",
        ))
        self.console.print()

    def print_step(self, command: Command) -> None:
        """Print a step to the console.

        Args:
            command: The command about to run
        """
        if not self.console:
            return

        sanitized = sanitize_command(command)
        step_text = Text()
        step_text.append(f"Step {self.step_count + 1}: ", style="bold")
        step_text.append(sanitized["command"], style="bold cyan")

        args_str = ", ".join(f"{k}={v!r}" for k, v in sanitized["args"].items())
        if args_str:
            step_text.append(f"({args_str})", style="dim")

        self.console.print(step_text)

    def print_result(self, observation: str) -> None:
        """Print an observation to console."""
        if not self.console:
            return
        preview = observation if len(observation) <= 200 else observation[:200] + "..."
        self.console.print(f"  [green]✓[/green] {preview}")

    def print_error(self, error: str) -> None:
        """Print an error message to console."""
        logger.error("Agent request failed: %s", error)
        if not self.console:
            return
        self.console.print(f"  [bold red]Error:[/bold red] {error}")

    def print_final_answer(self, answer: str) -> None:
        """Print the final answer to console."""
        logger.info("Agent request answered after %d steps", self.step_count)
        if not self.console:
            return

        self.console.print()
        self.console.print(Panel(
            answer,
            title="Final Answer",
            border_style="green",
        ))

    def print_summary(self) -> None:
        """Print the run summary to console."""
        if not self.console:
            return

        table = Table(title="Run Summary", show_header=False)
        table.add_column("Property", style="dim")
        table.add_column("Value")

        table.add_row("Steps Executed", str(self.step_count))
        if self.steps_file is not None:
            table.add_row("Steps Log", str(self.steps_file))

        self.console.print()
        self.console.print(table)
