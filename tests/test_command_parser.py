"""
Tests for the command grammar.
"""

import pytest

from browser_agent.command_parser import parse_command, split_command_line
from browser_agent.types import (
    Answer,
    Back,
    Click,
    Extract,
    Fill,
    Goto,
    Screenshot,
    Scroll,
    Title,
    Unknown,
    Url,
)


class TestSplitCommandLine:
    """Tests for keyword/remainder splitting."""

    def test_keyword_and_remainder(self):
        """Test splitting keyword from argument."""
        assert split_command_line("GOTO_URL https://example.com") == (
            "GOTO_URL", "https://example.com"
        )

    def test_only_first_line_is_used(self):
        """Later lines are not part of the command."""
        text = "CLICK_SELECTOR #submit\nI will now click the button."
        assert split_command_line(text) == ("CLICK_SELECTOR", "#submit")

    def test_windows_line_endings(self):
        """Trailing carriage returns are dropped."""
        assert split_command_line("GET_TITLE\r\nthanks") == ("GET_TITLE", "")

    def test_empty_text(self):
        """Empty text yields empty parts."""
        assert split_command_line("") == ("", "")
        assert split_command_line("   \n  ") == ("", "")


class TestParseCommand:
    """Tests for parse_command."""

    def test_goto(self):
        """Test GOTO_URL parsing."""
        assert parse_command("GOTO_URL https://example.com") == Goto(url="https://example.com")

    def test_click_keeps_selector_verbatim(self):
        """Selectors with spaces are kept whole."""
        command = parse_command("CLICK_SELECTOR div.results > a:nth-child(2)")
        assert command == Click(selector="div.results > a:nth-child(2)")

    @pytest.mark.parametrize("text,expected", [
        ("EXTRACT_TEXT", Extract()),
        ("SCROLL_DOWN", Scroll()),
        ("GET_TITLE", Title()),
        ("GET_URL", Url()),
        ("GO_BACK", Back()),
        ("TAKE_SCREENSHOT", Screenshot()),
    ])
    def test_commands_without_arguments(self, text, expected):
        """Test argument-free keywords."""
        assert parse_command(text) == expected

    def test_keywords_are_case_insensitive(self):
        """Keywords match in any case."""
        assert parse_command("goto_url https://example.com") == Goto(url="https://example.com")
        assert parse_command("Extract_Text") == Extract()

    def test_fill_with_value(self):
        """Test FILL_FORM with selector and value."""
        command = parse_command("FILL_FORM loginBox | secret value")
        assert command == Fill(selector="loginBox", value="secret value")

    def test_fill_without_separator_has_empty_value(self):
        """A missing value is empty."""
        assert parse_command("FILL_FORM loginBox") == Fill(selector="loginBox", value="")

    def test_fill_ignores_extra_pieces(self):
        """Only the first two pieces are used."""
        command = parse_command("FILL_FORM #q | first | second")
        assert command == Fill(selector="#q", value="first")

    def test_answer_with_colon(self):
        """Test ANSWER: prefix removal."""
        assert parse_command("ANSWER: Paris is the capital.") == Answer(text="Paris is the capital.")

    def test_answer_without_colon(self):
        """Test ANSWER prefix without colon."""
        assert parse_command("ANSWER Paris is the capital.") == Answer(text="Paris is the capital.")

    def test_answer_lowercase_keeps_following_lines(self):
        """Multi-line answers are kept whole."""
        command = parse_command("answer: Two results:\n- one\n- two")
        assert command == Answer(text="Two results:\n- one\n- two")

    def test_answer_glued_to_text_is_unknown(self):
        """ANSWER must be followed by whitespace."""
        assert parse_command("ANSWER:Paris") == Unknown(raw_text="ANSWER:Paris")

    def test_commands_on_later_lines_are_ignored(self):
        """A keyword on a later line does not count."""
        text = "Let me think about this.\nGOTO_URL https://example.com"
        assert parse_command(text) == Unknown(raw_text=text)

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "OPEN_TAB https://example.com",
        "I am not sure what to do next.",
        "```\nGOTO_URL https://example.com\n```",
    ])
    def test_unrecognized_input_yields_unknown(self, text):
        """Anything else keeps its raw text."""
        command = parse_command(text)
        assert isinstance(command, Unknown)
        assert command.raw_text == text
