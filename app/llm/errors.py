from __future__ import annotations

from typing import Optional

import httpx
from openai import APITimeoutError

TIMEOUT_ERRORS = (TimeoutError, httpx.TimeoutException, APITimeoutError)


class GatewayError(Exception):
    """Base class for every failure the gateway surfaces to its callers."""

    code = "gateway_error"
    status_code = 500

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.code)


class InvalidProviderError(GatewayError):
    code = "invalid_provider"
    status_code = 400

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"provider {name!r} does not implement generate()")


class UnknownProviderError(GatewayError):
    code = "unknown_provider"
    status_code = 404

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown provider: {name}")


class NoActiveProviderError(GatewayError):
    code = "no_active_provider"
    status_code = 503

    def __init__(self) -> None:
        super().__init__("No active provider available")


class InvalidOptionsError(GatewayError):
    code = "invalid_options"
    status_code = 422

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid generation options: {reason}")


class PermissionDeniedError(GatewayError):
    code = "permission_denied"
    status_code = 403

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"permission denied for action {action!r}")


class RateLimitExceededError(GatewayError):
    """Admission refused because the current window is full. Retry after it resets."""

    code = "rate_limit_exceeded"
    status_code = 429

    def __init__(self, limit: int, retry_after_s: float) -> None:
        self.limit = limit
        self.retry_after_s = retry_after_s
        super().__init__(f"Rate limit exceeded ({limit}/min). Please try again later.")


class ProviderError(GatewayError):
    """Any failure raised by the delegated generate() call, with the original cause attached."""

    code = "provider_error"
    status_code = 502

    def __init__(self, provider: str, cause: BaseException) -> None:
        self.provider = provider
        self.cause = cause
        if self.is_timeout:
            self.code = "provider_timeout"
            self.status_code = 504
        super().__init__(f"provider {provider!r} failed: {type(cause).__name__}: {cause}")

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.cause, TIMEOUT_ERRORS)


class MalformedResponseError(ValueError):
    """Raised by adapters when a backend answers 2xx without the expected field."""
