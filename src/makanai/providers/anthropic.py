"""Anthropic messages API adapter."""

from typing import Any

from makanai.providers.base import (
    GenerateRequest,
    ProxyResult,
    UpstreamRequest,
    UpstreamResponse,
    normalized_response,
    split_system_message,
    usage_block,
)

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicAdapter:
    name = "anthropic"

    def __init__(self, base_url: str = "https://api.anthropic.com") -> None:
        self.base_url = base_url.rstrip("/")

    @staticmethod
    def _first_text(content: Any) -> str:
        if not isinstance(content, list) or not content:
            return ""
        first = content[0]
        if not isinstance(first, dict):
            return ""
        text = first.get("text")
        return text if isinstance(text, str) else ""

    @staticmethod
    def _parse_usage(usage: Any) -> dict[str, int] | None:
        if not isinstance(usage, dict):
            return None
        return usage_block(usage.get("input_tokens"), usage.get("output_tokens"))

    def to_upstream_request(self, request: GenerateRequest, api_key: str) -> UpstreamRequest:
        system, conversation = split_system_message(request.messages)
        body: dict[str, Any] = {
            "model": request.model,
            "messages": [
                {"role": item.get("role", "user"), "content": item.get("content", "")}
                for item in conversation
            ],
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }
        if system:
            body["system"] = system
        return UpstreamRequest(
            url=f"{self.base_url}/v1/messages",
            headers={
                "x-api-key": api_key,
                "anthropic-version": ANTHROPIC_VERSION,
                "Content-Type": "application/json",
            },
            body=body,
        )

    def from_upstream_response(
        self, request: GenerateRequest, response: UpstreamResponse
    ) -> ProxyResult:
        payload = response.payload if isinstance(response.payload, dict) else {}
        # stop_reason is not surfaced; length-truncated output also reports "stop".
        return ProxyResult(
            status_code=response.status_code,
            body=normalized_response(
                provider=self.name,
                model=request.model,
                content=self._first_text(payload.get("content")),
                finish_reason="stop",
                usage=self._parse_usage(payload.get("usage")),
            ),
        )
