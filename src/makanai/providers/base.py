"""Provider contracts."""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(slots=True)
class GenerateRequest:
    """An inbound chat request with every default already resolved."""

    provider: str
    model: str
    messages: list[dict[str, str]]
    temperature: float = 0.7
    max_tokens: int = 1024


@dataclass(slots=True)
class UpstreamRequest:
    url: str
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class UpstreamResponse:
    status_code: int
    payload: Any


@dataclass(slots=True)
class ProxyResult:
    status_code: int
    body: dict[str, Any]


def usage_block(prompt_tokens: Any, completion_tokens: Any) -> dict[str, int]:
    prompt = prompt_tokens if isinstance(prompt_tokens, int) else 0
    completion = completion_tokens if isinstance(completion_tokens, int) else 0
    return {
        "prompt_tokens": prompt,
        "completion_tokens": completion,
        "total_tokens": prompt + completion,
    }


def normalized_response(
    provider: str,
    model: str,
    content: str,
    finish_reason: str,
    usage: dict[str, int] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "provider": provider,
        "model": model,
        "choices": [
            {
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
    }
    if usage is not None:
        body["usage"] = usage
    return body


def split_system_message(
    messages: list[dict[str, str]],
) -> tuple[str | None, list[dict[str, str]]]:
    """Return the first system prompt and the remaining conversation turns."""
    system: str | None = None
    rest: list[dict[str, str]] = []
    for item in messages:
        if item.get("role") == "system":
            if system is None:
                system = item.get("content", "")
            continue
        rest.append(item)
    return (system or None), rest


class ProviderAdapter(Protocol):
    name: str

    def to_upstream_request(self, request: GenerateRequest, api_key: str) -> UpstreamRequest: ...

    def from_upstream_response(
        self, request: GenerateRequest, response: UpstreamResponse
    ) -> ProxyResult: ...
