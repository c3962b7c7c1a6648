"""
Type definitions for Browser Agent.

Provides the conversation turn and the closed set of commands a model
can issue. Commands are immutable and built once per loop iteration.
"""

from dataclasses import dataclass
from typing import Literal, Union


Role = Literal["system", "user", "assistant", "tool"]


@dataclass(frozen=True)
class ConversationMessage:
    """One turn of the conversation transcript.

    Attributes:
        role: Who produced the turn
        content: Raw text of the turn
    """
    role: Role
    content: str

    def render(self) -> str:
        """Format the turn as a prompt line."""
        return f"{self.role.upper()}: {self.content}"


@dataclass(frozen=True)
class Goto:
    """Navigate the page to a URL."""
    url: str


@dataclass(frozen=True)
class Click:
    """Click the first element matching a selector."""
    selector: str


@dataclass(frozen=True)
class Extract:
    """Read the page body text."""


@dataclass(frozen=True)
class Scroll:
    """Scroll down by one viewport height."""


@dataclass(frozen=True)
class Title:
    """Read the page title."""


@dataclass(frozen=True)
class Url:
    """Read the page address."""


@dataclass(frozen=True)
class Back:
    """Go back one history entry."""


@dataclass(frozen=True)
class Fill:
    """Type a value into the element matching a selector."""
    selector: str
    value: str = ""


@dataclass(frozen=True)
class Screenshot:
    """Capture a full-page screenshot."""


@dataclass(frozen=True)
class Answer:
    """Final answer; ends the loop successfully."""
    text: str


@dataclass(frozen=True)
class Unknown:
    """Model output that matched no command keyword."""
    raw_text: str


ToolCommand = Union[Goto, Click, Extract, Scroll, Title, Url, Back, Fill, Screenshot]

Command = Union[ToolCommand, Answer, Unknown]


def describe_command(command: Command) -> tuple[str, dict[str, str]]:
    """Return a command's name and arguments for logging.

    Args:
        command: Parsed command

    Returns:
        Tuple of (lowercase name, argument dict)
    """
    return type(command).__name__.lower(), dict(vars(command))
