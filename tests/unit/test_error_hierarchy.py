"""Tests for error hierarchy."""

from makanai.errors import (
    ConfigError,
    MakanaiError,
    PlanExtractionError,
    ProxyError,
    RequestError,
    UpstreamUnreachableError,
)


def test_hierarchy() -> None:
    assert issubclass(RequestError, MakanaiError)
    assert issubclass(ProxyError, MakanaiError)
    assert issubclass(UpstreamUnreachableError, MakanaiError)
    assert issubclass(PlanExtractionError, MakanaiError)
    assert issubclass(ConfigError, MakanaiError)


def test_retryable_default() -> None:
    assert MakanaiError("test").retryable is False
    assert UpstreamUnreachableError("test").retryable is True
    assert RequestError("test").retryable is False
    assert PlanExtractionError("test").retryable is False


def test_status_codes_are_carried() -> None:
    assert ProxyError("Invalid JSON").status_code == 400
    assert ProxyError("no key", status_code=500).status_code == 500
    assert RequestError("boom").status_code is None
    assert RequestError("boom", status_code=502).status_code == 502


def test_catch_as_makanai_error() -> None:
    try:
        raise RequestError("Failed to reach AI proxy")
    except MakanaiError as exc:
        assert str(exc) == "Failed to reach AI proxy"
