"""Makanai exception hierarchy.

All Makanai-specific exceptions inherit from MakanaiError,
enabling structured error handling and cleaner catch clauses.
"""


class MakanaiError(Exception):
    """Base exception for all Makanai errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class RequestError(MakanaiError):
    """A call to the AI proxy did not produce a successful response."""

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProxyError(MakanaiError):
    """A request rejected by the proxy before or while dispatching it."""

    def __init__(self, message: str = "", *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamUnreachableError(MakanaiError):
    """Transport failure (or unreadable body) talking to an AI provider."""

    def __init__(self, message: str = "", *, retryable: bool = True) -> None:
        super().__init__(message, retryable=retryable)


class PlanExtractionError(MakanaiError):
    """Model output could not be turned into a weekly plan."""


class ConfigError(MakanaiError):
    """Invalid or missing configuration."""
