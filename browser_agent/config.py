"""
Configuration management for Browser Agent.

Provides configuration dataclass and environment variable loading.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .providers import (
    PROVIDER_DEFAULT_MODELS,
    PROVIDER_DISPLAY_NAMES,
    PROVIDER_ENDPOINTS,
    PROVIDER_REQUIRES_API_KEY,
    Provider,
    parse_provider,
)

# Load environment variables from .env file if present
load_dotenv()


# Chromium flags needed to run inside containers
BROWSER_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.lower() in ("1", "true", "yes")


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if not value:
        return None
    return int(value)


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value) if value else None


@dataclass
class AgentConfig:
    """Configuration for the browser agent and its HTTP server."""

    # Completion service settings
    provider: Provider = field(
        default_factory=lambda: parse_provider(os.getenv("BROWSER_AGENT_PROVIDER", "google"))
    )
    model: Optional[str] = field(
        default_factory=lambda: os.getenv("BROWSER_AGENT_MODEL")
    )
    api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("BROWSER_AGENT_API_KEY") or os.getenv("GEMINI_API_KEY")
    )
    model_endpoint: Optional[str] = field(
        default_factory=lambda: os.getenv("BROWSER_AGENT_ENDPOINT")
    )
    temperature: float = 0.7
    max_output_tokens: int = 1024
    request_timeout: float = 60.0

    # Browser settings
    headless: bool = field(
        default_factory=lambda: _env_flag("BROWSER_AGENT_HEADLESS", True)
    )

    # Timeouts (ms)
    navigation_timeout: int = 30000
    action_timeout: int = 10000

    # Content limits
    extract_max_chars: int = 2000

    # Loop limits, None means unbounded
    max_iterations: Optional[int] = field(
        default_factory=lambda: _env_int("BROWSER_AGENT_MAX_ITERATIONS")
    )
    max_transcript_chars: Optional[int] = field(
        default_factory=lambda: _env_int("BROWSER_AGENT_MAX_TRANSCRIPT_CHARS")
    )

    # Artifacts
    screenshots_dir: Path = field(
        default_factory=lambda: _env_path("BROWSER_AGENT_SCREENSHOT_DIR") or Path("screenshots")
    )
    runs_dir: Optional[Path] = field(
        default_factory=lambda: _env_path("BROWSER_AGENT_RUNS_DIR")
    )

    # HTTP server
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # Debug mode - enables verbose logging (off by default)
    debug: bool = field(
        default_factory=lambda: _env_flag("BROWSER_AGENT_DEBUG", False)
    )

    @property
    def effective_model(self) -> str:
        """Get the model name, falling back to the provider default."""
        return self.model or PROVIDER_DEFAULT_MODELS[self.provider]

    @property
    def endpoint(self) -> str:
        """Get the completion endpoint, falling back to the provider default."""
        if self.model_endpoint:
            return self.model_endpoint.rstrip("/")
        return PROVIDER_ENDPOINTS[self.provider]

    def validate(self) -> tuple[bool, str]:
        """Validate the configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if PROVIDER_REQUIRES_API_KEY[self.provider] and not self.api_key:
            return False, f"{PROVIDER_DISPLAY_NAMES[self.provider]} requires an API key"
        for name in ("max_iterations", "max_transcript_chars"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                return False, f"{name} must be positive"
        if self.extract_max_chars <= 0:
            return False, "extract_max_chars must be positive"
        return True, ""

    def ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        if self.runs_dir is not None:
            self.runs_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_cli_args(
        cls,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        headless: Optional[bool] = None,
        max_iterations: Optional[int] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        debug: bool = False,
    ) -> "AgentConfig":
        """Create configuration from CLI arguments layered over the environment."""
        config = cls()
        if provider:
            config.provider = parse_provider(provider)
        if model:
            config.model = model
        if headless is not None:
            config.headless = headless
        if max_iterations is not None:
            config.max_iterations = max_iterations
        if host:
            config.host = host
        if port:
            config.port = port
        if debug:
            config.debug = True
        return config


# Default configuration values for documentation
DEFAULTS = {
    "provider": Provider.GOOGLE.value,
    "model": PROVIDER_DEFAULT_MODELS[Provider.GOOGLE],
    "headless": True,
    "host": "0.0.0.0",
    "port": 3000,
    "temperature": 0.7,
    "max_output_tokens": 1024,
    "navigation_timeout_ms": 30000,
    "action_timeout_ms": 10000,
    "extract_max_chars": 2000,
    "max_iterations": None,
}
