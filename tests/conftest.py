import os

import pytest

from makanai.config import get_settings

_PROVIDER_ENV = (
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "ANTHROPIC_API_KEY",
    "OPENAI_BASE_URL",
    "GEMINI_BASE_URL",
    "ANTHROPIC_BASE_URL",
)


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    for key in _PROVIDER_ENV:
        monkeypatch.delenv(key, raising=False)
    os.environ["APP_ENV"] = "test"
    os.environ["AI_PROXY_URL"] = "http://proxy.local"
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
