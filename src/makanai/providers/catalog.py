"""Supported providers and the models offered for each of them."""

PROVIDERS: tuple[str, ...] = ("openai", "gemini", "anthropic")

DEFAULT_PROVIDER = "gemini"

DEFAULT_MODELS: dict[str, str] = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.5-flash",
    "anthropic": "claude-3-haiku-20240307",
}

# Labels shown to app users when picking a model.
AI_MODELS: dict[str, dict[str, str]] = {
    "openai": {
        "gpt-4o-mini": "GPT-4o Mini (速い・安い)",
        "gpt-4o": "GPT-4o (高性能)",
    },
    "gemini": {
        "gemini-2.5-flash": "Gemini 2.5 Flash (速い・安い)",
        "gemini-2.5-pro": "Gemini 2.5 Pro (高性能)",
    },
    "anthropic": {
        "claude-3-haiku-20240307": "Claude 3 Haiku (速い・安い)",
        "claude-3-sonnet-20240229": "Claude 3 Sonnet (高性能)",
    },
}

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1024
