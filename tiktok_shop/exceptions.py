from __future__ import annotations
from typing import Any, Optional


class TikTokShopError(Exception):
    """Base class for every error raised by this package."""


class MissingCredential(TikTokShopError):
    """A required credential environment variable is unset or blank."""

    def __init__(self, variable: str):
        super().__init__(f"Missing required environment variable: {variable}")
        self.variable = variable


class ApiRequestError(TikTokShopError):
    """Generic API request error."""


class TransportFailure(ApiRequestError):
    """The HTTP call could not complete (DNS, connection, timeout)."""


class ApiError(ApiRequestError):
    """Remote service answered with a non-success status or an error payload."""

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status = status
        self.code = code
        self.body = body


class ApiAuthError(ApiError):
    """Authentication or authorization failure (401/403)."""


class ApiParameterError(ApiError):
    """Malformed request parameters (400/422, or rejected before sending)."""


class ApiRateLimitError(ApiError):
    """Rate limiting encountered (429)."""
