"""
Completion clients for Browser Agent.

The agent loop treats the completion service as text in, text out.
Clients exist for Google Gemini and for OpenAI-compatible APIs
(OpenAI, LM Studio). Every failure raises CompletionServiceError.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from .config import AgentConfig
from .errors import CompletionServiceError
from .providers import Provider


logger = logging.getLogger(__name__)


class CompletionClient(ABC):
    """Abstract base class for completion service clients."""

    def __init__(self, config: AgentConfig, client: Optional[httpx.AsyncClient] = None):
        """Initialize the client.

        Args:
            config: Agent configuration
            client: Optional preconfigured HTTP client
        """
        self.config = config
        self.endpoint = config.endpoint
        self.model = config.effective_model
        self.api_key = config.api_key
        self.temperature = config.temperature
        self.max_output_tokens = config.max_output_tokens
        self.client = client or httpx.AsyncClient(timeout=config.request_timeout)

    async def complete(self, prompt: str) -> str:
        """Send a prompt and return the generated text.

        Args:
            prompt: The full rendered conversation

        Returns:
            The completion text

        Raises:
            CompletionServiceError: On HTTP, transport or payload errors
        """
        url, payload, headers = self._build_request(prompt)
        logger.debug("Requesting completion from %s (%d prompt chars)", self.model, len(prompt))

        try:
            response = await self.client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise CompletionServiceError(
                f"Completion request failed with HTTP {e.response.status_code}: "
                f"{e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise CompletionServiceError(
                f"Completion request failed: {type(e).__name__}: {e}"
            ) from e
        except ValueError as e:
            raise CompletionServiceError(f"Completion response is not JSON: {e}") from e

        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            raise CompletionServiceError(f"Malformed completion response: {data!r:.200}") from e
        if not isinstance(text, str):
            raise CompletionServiceError(f"Malformed completion response: {data!r:.200}")
        return text

    @abstractmethod
    def _build_request(self, prompt: str) -> tuple[str, dict[str, Any], dict[str, str]]:
        """Build (url, payload, headers) for a prompt."""

    @abstractmethod
    def _extract_text(self, data: Any) -> str:
        """Pull the completion text out of a decoded response."""

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()


class GoogleCompletionClient(CompletionClient):
    """Client for the Google Generative Language API (Gemini)."""

    def _build_request(self, prompt: str) -> tuple[str, dict[str, Any], dict[str, str]]:
        url = f"{self.endpoint}/models/{self.model}:generateContent"
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]},
            ],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
        }
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-goog-api-key"] = self.api_key
        return url, payload, headers

    def _extract_text(self, data: Any) -> str:
        # Google returns candidates with content.parts
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part["text"] for part in parts if "text" in part)


class OpenAICompletionClient(CompletionClient):
    """Client for OpenAI Chat Completions and compatible APIs."""

    def _build_request(self, prompt: str) -> tuple[str, dict[str, Any], dict[str, str]]:
        url = f"{self.endpoint}/chat/completions"
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_output_tokens,
        }
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return url, payload, headers

    def _extract_text(self, data: Any) -> str:
        return data["choices"][0]["message"]["content"]


def create_completion_client(
    config: AgentConfig,
    client: Optional[httpx.AsyncClient] = None,
) -> CompletionClient:
    """Create a completion client for the configured provider.

    Args:
        config: Agent configuration
        client: Optional preconfigured HTTP client

    Returns:
        Configured completion client
    """
    clients = {
        Provider.GOOGLE: GoogleCompletionClient,
        Provider.OPENAI: OpenAICompletionClient,
        Provider.LM_STUDIO: OpenAICompletionClient,
    }

    client_class = clients.get(config.provider, OpenAICompletionClient)
    return client_class(config, client=client)
