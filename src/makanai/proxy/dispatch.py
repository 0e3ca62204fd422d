"""Stateless dispatch of one chat request to one upstream provider.

Each call validates the inbound body, resolves provider/model defaults, looks
up the provider credential, forwards the translated request and translates the
provider's answer back. Nothing is shared between calls apart from read-only
configuration, so concurrent requests need no coordination.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from makanai.config import ProviderCredentials
from makanai.errors import ProxyError, UpstreamUnreachableError
from makanai.logging import bind_context
from makanai.providers.base import (
    GenerateRequest,
    ProviderAdapter,
    ProxyResult,
    UpstreamRequest,
    UpstreamResponse,
)
from makanai.providers.catalog import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODELS,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
)
from makanai.providers.registry import build_adapters

logger = logging.getLogger(__name__)


def parse_body(raw_body: bytes) -> Any:
    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProxyError("Invalid JSON", status_code=400) from exc


def _coerce_messages(raw: Any) -> list[dict[str, str]]:
    if not isinstance(raw, list) or not raw:
        raise ProxyError("messages array is required", status_code=400)
    messages: list[dict[str, str]] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ProxyError("messages array is required", status_code=400)
        role = item.get("role")
        content = item.get("content")
        messages.append(
            {
                "role": role if isinstance(role, str) else "user",
                "content": content if isinstance(content, str) else "",
            }
        )
    return messages


def resolve_request(payload: Any, adapters: dict[str, ProviderAdapter]) -> GenerateRequest:
    """Validate the inbound payload and fill in every default."""
    if not isinstance(payload, dict):
        raise ProxyError("messages array is required", status_code=400)
    messages = _coerce_messages(payload.get("messages"))

    provider = payload.get("provider") or DEFAULT_PROVIDER
    if not isinstance(provider, str) or provider not in adapters:
        raise ProxyError(f"Unknown provider: {provider}", status_code=400)
    model = payload.get("model") or DEFAULT_MODELS.get(provider, "")
    temperature = payload.get("temperature")
    max_tokens = payload.get("max_tokens")
    return GenerateRequest(
        provider=provider,
        model=str(model),
        messages=messages,
        temperature=DEFAULT_TEMPERATURE if temperature is None else temperature,
        max_tokens=DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens,
    )


class ProviderDispatcher:
    def __init__(
        self,
        credentials: ProviderCredentials,
        *,
        adapters: dict[str, ProviderAdapter] | None = None,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.credentials = credentials
        self.adapters = adapters if adapters is not None else build_adapters()
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def _send(self, provider: str, upstream: UpstreamRequest) -> UpstreamResponse:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(
                    upstream.url, headers=upstream.headers, json=upstream.body
                )
        except httpx.HTTPError as exc:
            raise UpstreamUnreachableError(f"{provider}: {type(exc).__name__}: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamUnreachableError(
                f"{provider}: non-JSON response (status={response.status_code})"
            ) from exc
        return UpstreamResponse(status_code=response.status_code, payload=payload)

    async def dispatch(self, raw_body: bytes) -> ProxyResult:
        try:
            request = resolve_request(parse_body(raw_body), self.adapters)
            bind_context(provider=request.provider, model=request.model)
            api_key = self.credentials.for_provider(request.provider)
            if api_key is None:
                raise ProxyError(
                    f"API key not configured for provider: {request.provider}",
                    status_code=500,
                )
        except ProxyError as exc:
            logger.info("Rejected generate request (status=%d): %s", exc.status_code, exc)
            return ProxyResult(status_code=exc.status_code, body={"error": str(exc)})

        adapter = self.adapters[request.provider]
        try:
            response = await self._send(
                request.provider, adapter.to_upstream_request(request, api_key)
            )
        except UpstreamUnreachableError as exc:
            logger.warning("Upstream provider unreachable: %s", exc)
            return ProxyResult(
                status_code=502, body={"error": f"Failed to reach {request.provider} API"}
            )

        result = adapter.from_upstream_response(request, response)
        logger.info(
            "Dispatched to %s (model=%s, upstream_status=%d, status=%d)",
            request.provider,
            request.model,
            response.status_code,
            result.status_code,
        )
        return result
