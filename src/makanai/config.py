"""Application configuration contract."""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from makanai.errors import ConfigError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")

    # Security: bind host defaults to loopback
    bind_host: str = Field(alias="BIND_HOST", default="127.0.0.1")
    bind_port: int = Field(alias="BIND_PORT", default=8787)

    openai_api_key: str = Field(alias="OPENAI_API_KEY", default="")
    gemini_api_key: str = Field(alias="GEMINI_API_KEY", default="")
    anthropic_api_key: str = Field(alias="ANTHROPIC_API_KEY", default="")

    openai_base_url: str = Field(alias="OPENAI_BASE_URL", default="https://api.openai.com/v1")
    gemini_base_url: str = Field(
        alias="GEMINI_BASE_URL",
        default="https://generativelanguage.googleapis.com/v1beta",
    )
    anthropic_base_url: str = Field(
        alias="ANTHROPIC_BASE_URL", default="https://api.anthropic.com"
    )
    upstream_timeout_seconds: float = Field(alias="UPSTREAM_TIMEOUT_SECONDS", default=60.0)

    ai_proxy_url: str = Field(alias="AI_PROXY_URL", default="http://127.0.0.1:8787")
    ai_client_timeout_seconds: float = Field(alias="AI_CLIENT_TIMEOUT_SECONDS", default=60.0)


@dataclass(frozen=True, slots=True)
class ProviderCredentials:
    """API keys handed to the proxy at startup, one optional secret per provider."""

    openai: str | None = None
    gemini: str | None = None
    anthropic: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderCredentials":
        return cls(
            openai=settings.openai_api_key.strip() or None,
            gemini=settings.gemini_api_key.strip() or None,
            anthropic=settings.anthropic_api_key.strip() or None,
        )

    def for_provider(self, provider: str) -> str | None:
        value = getattr(self, provider, None) if provider in _CREDENTIAL_FIELDS else None
        if not isinstance(value, str) or not value.strip():
            return None
        return value

    def configured(self) -> list[str]:
        return [name for name in _CREDENTIAL_FIELDS if self.for_provider(name)]


_CREDENTIAL_FIELDS = ("openai", "gemini", "anthropic")


def validate_settings_for_env(settings: Settings) -> None:
    """Refuse to start a production proxy that could not serve any request."""
    if settings.app_env != "prod":
        return

    problems: list[str] = []
    if not ProviderCredentials.from_settings(settings).configured():
        problems.append("OPENAI_API_KEY|GEMINI_API_KEY|ANTHROPIC_API_KEY")
    upstreams = (
        ("OPENAI_BASE_URL", settings.openai_base_url),
        ("GEMINI_BASE_URL", settings.gemini_base_url),
        ("ANTHROPIC_BASE_URL", settings.anthropic_base_url),
    )
    # API keys travel in headers or the query string.
    problems.extend(
        f"{name}(https required)"
        for name, url in upstreams
        if not url.strip().startswith("https://")
    )
    if settings.upstream_timeout_seconds <= 0:
        problems.append("UPSTREAM_TIMEOUT_SECONDS(positive value required)")

    if problems:
        raise ConfigError(f"invalid production configuration: {', '.join(problems)}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
