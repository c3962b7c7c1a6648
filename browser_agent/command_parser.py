"""
Command grammar for Browser Agent.

Turns one raw completion into exactly one Command. Only the first line
selects the command; the parser never raises.
"""

import re

from .types import (
    Answer,
    Back,
    Click,
    Command,
    Extract,
    Fill,
    Goto,
    Screenshot,
    Scroll,
    Title,
    Unknown,
    Url,
)


FILL_SEPARATOR = " | "

_ANSWER_PREFIX = re.compile(r"^ANSWER:?\s*", re.IGNORECASE)

# Keywords whose command takes no argument
_NO_ARG_COMMANDS = {
    "EXTRACT_TEXT": Extract,
    "SCROLL_DOWN": Scroll,
    "GET_TITLE": Title,
    "GET_URL": Url,
    "GO_BACK": Back,
    "TAKE_SCREENSHOT": Screenshot,
}


def split_command_line(text: str) -> tuple[str, str]:
    """Split the first line of a completion into keyword and remainder.

    Args:
        text: Raw completion text

    Returns:
        Tuple of (keyword, remainder); both may be empty
    """
    first_line = text.strip().split("\n", 1)[0].rstrip()
    parts = first_line.split(None, 1)
    if not parts:
        return "", ""
    keyword = parts[0]
    remainder = parts[1] if len(parts) > 1 else ""
    return keyword, remainder


def parse_fill_argument(argument: str) -> Fill:
    """Parse ``<selector> | <value>`` into a Fill command.

    Only the first two pieces are used; a missing value is empty.
    """
    pieces = argument.split(FILL_SEPARATOR)
    value = pieces[1] if len(pieces) > 1 else ""
    return Fill(selector=pieces[0], value=value)


def parse_command(text: str) -> Command:
    """Parse a model completion into a Command.

    Args:
        text: Raw completion text

    Returns:
        The parsed command; Unknown when no keyword matches
    """
    keyword, argument = split_command_line(text)
    keyword = keyword.upper()

    if keyword == "GOTO_URL":
        return Goto(url=argument)
    if keyword == "CLICK_SELECTOR":
        return Click(selector=argument)
    if keyword == "FILL_FORM":
        return parse_fill_argument(argument)
    if keyword in ("ANSWER", "ANSWER:"):
        return Answer(text=_ANSWER_PREFIX.sub("", text.strip(), count=1))

    command_class = _NO_ARG_COMMANDS.get(keyword)
    if command_class is not None:
        return command_class()

    return Unknown(raw_text=text)
