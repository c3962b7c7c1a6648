"""
Conversation state for Browser Agent.

Holds the append-only transcript that is replayed into every prompt.
"""

from typing import Optional

from .types import ConversationMessage


SYSTEM_PROMPT = """You have browser-control commands:
GOTO_URL <url>
CLICK_SELECTOR <CSS selector>
EXTRACT_TEXT
SCROLL_DOWN
GET_TITLE
GET_URL
GO_BACK
FILL_FORM <selector> | <text>
TAKE_SCREENSHOT
Reply with exactly one command on the first line of each response.
When done, respond with ANSWER: <your human-friendly answer>."""


class Conversation:
    """Ordered transcript of one request.

    Starts with a system turn and the user's query; every later pair of
    turns is (assistant, tool). Turns are never removed or reordered.
    """

    def __init__(self, query: str, system_prompt: Optional[str] = None):
        """Seed the transcript.

        Args:
            query: The user's query
            system_prompt: Override for the command vocabulary prompt
        """
        self._messages: list[ConversationMessage] = [
            ConversationMessage("system", system_prompt or SYSTEM_PROMPT),
            ConversationMessage("user", query),
        ]

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        """Get an immutable view of the transcript."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def add_exchange(self, assistant_text: str, observation: str) -> None:
        """Append the model output and the observation it produced.

        Args:
            assistant_text: Raw completion that produced the command
            observation: Result of executing the command
        """
        self._messages.append(ConversationMessage("assistant", assistant_text))
        self._messages.append(ConversationMessage("tool", observation))

    def render(self) -> str:
        """Render the transcript into a single prompt text."""
        return "\n\n".join(message.render() for message in self._messages)
