"""OpenAI chat completions adapter.

OpenAI's schema is what the proxy normalizes towards, so the upstream body and
status are handed back untouched.
"""

from makanai.providers.base import GenerateRequest, ProxyResult, UpstreamRequest, UpstreamResponse


class OpenAIAdapter:
    name = "openai"

    def __init__(self, base_url: str = "https://api.openai.com/v1") -> None:
        self.base_url = base_url.rstrip("/")

    def to_upstream_request(self, request: GenerateRequest, api_key: str) -> UpstreamRequest:
        return UpstreamRequest(
            url=f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            body={
                "model": request.model,
                "messages": request.messages,
                "temperature": request.temperature,
                "max_tokens": request.max_tokens,
            },
        )

    def from_upstream_response(
        self, request: GenerateRequest, response: UpstreamResponse
    ) -> ProxyResult:
        del request
        return ProxyResult(status_code=response.status_code, body=response.payload)
