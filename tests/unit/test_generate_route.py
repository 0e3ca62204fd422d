import httpx
from fastapi.testclient import TestClient

from makanai.config import ProviderCredentials
from makanai.main import CORS_HEADERS, create_app

KEYS = ProviderCredentials(openai="sk-test", gemini="g-key", anthropic="a-key")


def _gemini_upstream(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "candidates": [{"content": {"parts": [{"text": "こんにちは"}]}}],
            "usageMetadata": {"promptTokenCount": 2, "candidatesTokenCount": 3},
        },
    )


def _client(credentials: ProviderCredentials = KEYS) -> TestClient:
    app = create_app(credentials, transport=httpx.MockTransport(_gemini_upstream))
    return TestClient(app)


def _assert_cors(response: httpx.Response) -> None:
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


def test_generate_success() -> None:
    response = _client().post(
        "/generate", json={"messages": [{"role": "user", "content": "hi"}]}
    )
    assert response.status_code == 200
    _assert_cors(response)
    body = response.json()
    assert body["provider"] == "gemini"
    assert body["choices"][0]["message"] == {"role": "assistant", "content": "こんにちは"}
    assert body["usage"] == {"prompt_tokens": 2, "completion_tokens": 3, "total_tokens": 5}


def test_generate_invalid_json() -> None:
    response = _client().post(
        "/generate", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON"}
    _assert_cors(response)


def test_generate_empty_messages() -> None:
    response = _client().post("/generate", json={"messages": []})
    assert response.status_code == 400
    assert response.json() == {"error": "messages array is required"}
    _assert_cors(response)


def test_generate_missing_default_key() -> None:
    client = _client(ProviderCredentials(openai="sk", anthropic="a"))
    response = client.post("/generate", json={"messages": [{"role": "user", "content": "hi"}]})
    assert response.status_code == 500
    assert response.json() == {"error": "API key not configured for provider: gemini"}
    _assert_cors(response)


def test_get_generate_is_not_found() -> None:
    response = _client().get("/generate")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}
    _assert_cors(response)


def test_unknown_path_is_not_found() -> None:
    response = _client().post("/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}
    _assert_cors(response)


def test_trailing_slash_is_not_found_rather_than_redirected() -> None:
    response = _client().post(
        "/generate/",
        json={"messages": [{"role": "user", "content": "hi"}]},
        follow_redirects=False,
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}
    _assert_cors(response)


def test_docs_are_not_exposed() -> None:
    assert _client().get("/docs").status_code == 404


def test_options_preflight_returns_empty_body_with_cors_headers() -> None:
    client = _client()
    for path in ("/generate", "/anything"):
        response = client.options(
            path,
            headers={
                "Origin": "http://localhost:8081",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 204
        assert response.content == b""
        _assert_cors(response)


def test_lifespan_starts_with_default_settings() -> None:
    with TestClient(create_app(KEYS)) as client:
        response = client.post("/generate", json={"messages": "nope"})
    assert response.status_code == 400
