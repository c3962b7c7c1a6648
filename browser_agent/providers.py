"""
Completion provider configuration for Browser Agent.

Provides provider-specific endpoints and default models.
"""

from enum import Enum


class Provider(str, Enum):
    """Supported completion providers."""
    GOOGLE = "google"
    OPENAI = "openai"
    LM_STUDIO = "lm_studio"


# Default endpoints for each provider
PROVIDER_ENDPOINTS = {
    Provider.GOOGLE: "https://generativelanguage.googleapis.com/v1beta",
    Provider.OPENAI: "https://api.openai.com/v1",
    Provider.LM_STUDIO: "http://127.0.0.1:1234/v1",
}

# Default models for each provider
PROVIDER_DEFAULT_MODELS = {
    Provider.GOOGLE: "gemini-2.5-flash",
    Provider.OPENAI: "gpt-4o-mini",
    Provider.LM_STUDIO: "qwen2.5:7b",
}

# Provider display names
PROVIDER_DISPLAY_NAMES = {
    Provider.GOOGLE: "Google AI",
    Provider.OPENAI: "OpenAI",
    Provider.LM_STUDIO: "LM Studio (Local)",
}

# Whether provider requires API key
PROVIDER_REQUIRES_API_KEY = {
    Provider.GOOGLE: True,
    Provider.OPENAI: True,
    Provider.LM_STUDIO: False,
}


def parse_provider(value: str) -> Provider:
    """Parse a provider name, case-insensitively.

    Raises:
        ValueError: If the name is not a known provider
    """
    try:
        return Provider(value.strip().lower())
    except ValueError:
        known = ", ".join(p.value for p in Provider)
        raise ValueError(f"Unknown provider '{value}' (expected one of: {known})") from None
