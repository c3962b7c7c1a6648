"""
Tests for the command-line interface.
"""

from unittest.mock import patch

import pytest

from browser_agent.agent import AgentResult
from browser_agent.cli import create_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("BROWSER_AGENT_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("BROWSER_AGENT_PROVIDER", raising=False)
    monkeypatch.setenv("BROWSER_AGENT_SCREENSHOT_DIR", str(tmp_path / "shots"))
    monkeypatch.delenv("BROWSER_AGENT_RUNS_DIR", raising=False)


class TestParser:
    """Tests for argument parsing."""

    def test_run_arguments(self):
        """Test parsing of run options."""
        args = create_parser().parse_args(
            ["run", "find the docs", "--provider", "openai", "--headed", "--max-iterations", "7"]
        )
        assert args.command == "run"
        assert args.query == "find the docs"
        assert args.provider == "openai"
        assert args.headed is True
        assert args.max_iterations == 7

    def test_serve_arguments(self):
        """Test parsing of serve options."""
        args = create_parser().parse_args(["serve", "--port", "8000", "--host", "127.0.0.1"])
        assert args.command == "serve"
        assert args.port == 8000
        assert args.host == "127.0.0.1"


class TestMain:
    """Tests for exit codes."""

    def test_no_command_prints_help(self, capsys):
        """No subcommand prints help and exits cleanly."""
        assert main([]) == 0
        assert "browser-agent" in capsys.readouterr().out

    def test_unknown_provider(self):
        """An unknown provider is a usage error."""
        assert main(["run", "q", "--provider", "nope"]) == 2

    def test_missing_api_key(self):
        """A provider without its API key is a usage error."""
        assert main(["run", "q", "--provider", "google"]) == 2

    def test_run_exit_codes(self, monkeypatch):
        """Answer exits 0, failure exits 1."""
        monkeypatch.setenv("BROWSER_AGENT_API_KEY", "k")

        async def answered(config, query, base_url):
            return AgentResult(success=True, final_answer="yes", steps_taken=1)

        async def failed(config, query, base_url):
            return AgentResult(success=False, final_answer=None, steps_taken=1, error="boom")

        with patch("browser_agent.cli._run_query", answered):
            assert main(["run", "q"]) == 0
        with patch("browser_agent.cli._run_query", failed):
            assert main(["run", "q"]) == 1

    def test_run_base_url_defaults_to_port(self, monkeypatch):
        """Screenshot links default to localhost on the configured port."""
        monkeypatch.setenv("BROWSER_AGENT_API_KEY", "k")
        monkeypatch.setenv("PORT", "4321")
        seen = {}

        async def capture(config, query, base_url):
            seen["base_url"] = base_url
            return AgentResult(success=True, final_answer="ok", steps_taken=1)

        with patch("browser_agent.cli._run_query", capture):
            main(["run", "q"])

        assert seen["base_url"] == "http://localhost:4321"
