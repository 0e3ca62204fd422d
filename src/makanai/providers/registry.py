"""Provider construction helpers."""

from makanai.config import Settings
from makanai.providers.anthropic import AnthropicAdapter
from makanai.providers.base import ProviderAdapter
from makanai.providers.gemini import GeminiAdapter
from makanai.providers.openai import OpenAIAdapter


def build_adapters(settings: Settings | None = None) -> dict[str, ProviderAdapter]:
    """Dispatch table from provider tag to adapter instance."""
    if settings is None:
        return {
            "openai": OpenAIAdapter(),
            "gemini": GeminiAdapter(),
            "anthropic": AnthropicAdapter(),
        }
    return {
        "openai": OpenAIAdapter(settings.openai_base_url),
        "gemini": GeminiAdapter(settings.gemini_base_url),
        "anthropic": AnthropicAdapter(settings.anthropic_base_url),
    }
