from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import requests
from .exceptions import (
    ApiAuthError,
    ApiError,
    ApiParameterError,
    ApiRateLimitError,
    TransportFailure,
)

logger = logging.getLogger(__name__)


@dataclass
class ApiResponse:
    """Response envelope returned by every call."""
    status: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)


class BaseClient:
    """Base HTTP client: one attempt per call, status mapping and JSON handling."""
    BASE_URL: str = ''

    def __init__(self, timeout: int = 30, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return path if path.startswith('http') else self.BASE_URL.rstrip('/') + '/' + path.lstrip('/')

    def _request(self, method: str, path: str, *, params: Dict[str, Any] | None = None, headers: Dict[str, str] | None = None, data: str | None = None) -> ApiResponse:
        url = self._url(path)
        logger.debug("%s %s", method.upper(), url)
        try:
            resp = self.session.request(method.upper(), url, params=params, headers=headers, data=data, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportFailure(f"Network error: {e}") from e

        body = self._decode(resp)
        status = resp.status_code
        if status == 401 or status == 403:
            raise ApiAuthError(f"Auth error {status}: {resp.text[:200]}", status=status, body=body)
        if status == 429:
            raise ApiRateLimitError(f"Rate limit hit (429): {resp.text[:200]}", status=status, body=body)
        if status == 400 or status == 422:
            raise ApiParameterError(f"Bad request {status}: {resp.text[:200]}", status=status, body=body)
        if status >= 400:
            raise ApiError(f"HTTP {status}: {resp.text[:200]}", status=status, body=body)
        return ApiResponse(status=status, body=body, headers=dict(resp.headers))

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        ctype = resp.headers.get('Content-Type', '')
        if 'application/json' in ctype:
            try:
                return resp.json()
            except (json.JSONDecodeError, ValueError):
                if resp.status_code < 400:
                    raise ApiError('Failed to decode JSON response', status=resp.status_code, body=resp.text)
        return resp.text
