"""AI proxy client.

Talks to the proxy's ``POST /generate`` and hands back the normalized response
regardless of which provider answered.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any

import httpx

from makanai.config import get_settings
from makanai.errors import RequestError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerateOptions:
    provider: str | None = None
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None

    def merged(self, **overrides: Any) -> GenerateOptions:
        return replace(self, **overrides)

    def to_payload(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def extract_content(response: dict[str, Any]) -> str:
    """Text of the first choice, or an empty string when there is none."""
    choices = response.get("choices") if isinstance(response, dict) else None
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""


class AIClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.ai_proxy_url).rstrip("/")
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.ai_client_timeout_seconds
        )
        self._transport = transport

    async def generate(
        self,
        messages: list[dict[str, str]],
        options: GenerateOptions | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"messages": messages, **(options or GenerateOptions()).to_payload()}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(f"{self.base_url}/generate", json=body)
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("AI proxy call failed: %s", exc)
            raise RequestError("Failed to reach AI proxy") from exc

        if not response.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            message = (
                error
                if isinstance(error, str) and error
                else f"AI request failed with status {response.status_code}"
            )
            raise RequestError(message, status_code=response.status_code)
        if not isinstance(data, dict):
            raise RequestError(
                "AI proxy returned a malformed response", status_code=response.status_code
            )
        return data

    async def ask(
        self,
        prompt: str,
        system_prompt: str | None = None,
        options: GenerateOptions | None = None,
    ) -> str:
        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return extract_content(await self.generate(messages, options))
