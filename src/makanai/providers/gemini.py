"""Gemini generateContent adapter (REST request building + response parsing)."""

from __future__ import annotations

import logging
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

logger = logging.getLogger(__name__)


def to_contents(messages: list[dict[str, str]]) -> list[dict[str, object]]:
    contents: list[dict[str, object]] = []
    for msg in messages:
        role = msg.get("role", "user")
        text = msg.get("content", "")
        gemini_role = "model" if role == "assistant" else "user"
        contents.append({"role": gemini_role, "parts": [{"text": text}]})
    return contents


def build_request_body(
    messages: list[dict[str, str]],
    temperature: float = 0.7,
    max_tokens: int = 1024,
) -> dict[str, object]:
    system, conversation = split_system_message(messages)
    body: dict[str, object] = {
        "contents": to_contents(conversation),
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_tokens,
        },
    }
    if system:
        body["systemInstruction"] = {"parts": [{"text": system}]}
    return body


def candidate_text(candidates: Any) -> tuple[str, str]:
    """Concatenated text and lower-cased finish reason of the first candidate."""
    if not isinstance(candidates, list) or not candidates:
        return "", "stop"
    first = candidates[0]
    if not isinstance(first, dict):
        return "", "stop"
    content = first.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    text_parts: list[str] = []
    if isinstance(parts, list):
        for part in parts:
            if not isinstance(part, dict):
                continue
            text = part.get("text")
            if isinstance(text, str) and text:
                text_parts.append(text)
    finish_reason = first.get("finishReason")
    if isinstance(finish_reason, str) and finish_reason:
        return "".join(text_parts), finish_reason.lower()
    return "".join(text_parts), "stop"


def parse_usage(metadata: Any) -> dict[str, int] | None:
    if not isinstance(metadata, dict):
        return None
    return usage_block(metadata.get("promptTokenCount"), metadata.get("candidatesTokenCount"))


class GeminiAdapter:
    name = "gemini"

    def __init__(
        self, base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    ) -> None:
        self.base_url = base_url.rstrip("/")

    def to_upstream_request(self, request: GenerateRequest, api_key: str) -> UpstreamRequest:
        return UpstreamRequest(
            url=f"{self.base_url}/models/{request.model}:generateContent?key={api_key}",
            headers={"Content-Type": "application/json"},
            body=build_request_body(request.messages, request.temperature, request.max_tokens),
        )

    def from_upstream_response(
        self, request: GenerateRequest, response: UpstreamResponse
    ) -> ProxyResult:
        payload = response.payload if isinstance(response.payload, dict) else {}
        error = payload.get("error")
        # An error object counts even when empty.
        if isinstance(error, dict | list) or error:
            message = error.get("message") if isinstance(error, dict) else None
            if not isinstance(message, str) or not message:
                message = "Gemini API error"
            logger.warning(
                "Gemini reported an error (status=%d): %s", response.status_code, message
            )
            return ProxyResult(status_code=response.status_code, body={"error": message})
        text, finish_reason = candidate_text(payload.get("candidates"))
        return ProxyResult(
            status_code=response.status_code,
            body=normalized_response(
                provider=self.name,
                model=request.model,
                content=text,
                finish_reason=finish_reason,
                usage=parse_usage(payload.get("usageMetadata")),
            ),
        )
