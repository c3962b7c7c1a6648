"""
Exception hierarchy for Browser Agent.

Every failure inside the agent loop is terminal for its request. All of
them inherit from AgentError so callers can catch broad or specific
errors as needed.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Command


class AgentError(Exception):
    """Base exception for all agent loop errors."""


class CompletionServiceError(AgentError):
    """Raised when the completion call fails or returns malformed data."""


class UnrecognizedCommandError(AgentError):
    """Raised when the model output matches no command keyword."""

    def __init__(self, raw_text: str):
        super().__init__(f"Unknown command: {raw_text}")
        self.raw_text = raw_text


class ToolExecutionError(AgentError):
    """Raised when a recognized command's browser action fails."""

    def __init__(self, message: str, command: Optional["Command"] = None):
        super().__init__(message)
        self.command = command


class LoopLimitError(AgentError):
    """Raised when a configured loop limit is exceeded."""


class IterationLimitError(LoopLimitError):
    """Raised when the loop runs more dispatch cycles than allowed."""


class TranscriptLimitError(LoopLimitError):
    """Raised when the rendered prompt grows past the allowed size."""
