from __future__ import annotations
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Callable, Dict, Optional
import requests
from .base_client import ApiResponse, BaseClient
from .config import ClientConfig, Credentials
from .exceptions import ApiError, ApiParameterError

logger = logging.getLogger(__name__)

# Query parameters never covered by the request signature
_UNSIGNED_PARAMS = ('sign', 'access_token')


class TikTokShopClient(BaseClient):
    """Signed TikTok Shop Open API client bound to production or sandbox."""

    def __init__(self, credentials: Credentials, config: Optional[ClientConfig] = None, session: Optional[requests.Session] = None, clock: Callable[[], float] = time.time):
        config = config or ClientConfig()
        super().__init__(timeout=config.timeout, session=session)
        self.credentials = credentials
        self.config = config
        self.BASE_URL = config.resolved_base_url
        self._clock = clock
        self.api = ApiGroups(self)

    @property
    def base_url(self) -> str:
        return self.BASE_URL

    def sign(self, path: str, params: Dict[str, Any], body: str = '', content_type: str = 'application/json') -> str:
        secret = self.credentials.app_secret
        keys = sorted(k for k in params if k not in _UNSIGNED_PARAMS)
        payload = path + ''.join(f"{k}{params[k]}" for k in keys)
        if not content_type.lower().startswith('multipart/form-data'):
            payload += body
        payload = secret + payload + secret
        return hmac.new(secret.encode('utf-8'), payload.encode('utf-8'), hashlib.sha256).hexdigest()

    def call(self, method: str, path: str, *, access_token: str, content_type: str, params: Dict[str, Any] | None = None, body: Any | None = None) -> ApiResponse:
        query: Dict[str, Any] = {k: v for k, v in (params or {}).items() if v is not None}
        query['app_key'] = self.credentials.app_key
        query['timestamp'] = str(int(self._clock()))
        data = json.dumps(body, separators=(',', ':')) if body is not None else ''
        query['sign'] = self.sign(path, query, data, content_type)
        headers = {
            'x-tts-access-token': access_token,
            'Content-Type': content_type,
            'Accept': 'application/json',
        }
        resp = self._request(method, path, params=query, headers=headers, data=data or None)
        self._check_payload(resp)
        return resp

    @staticmethod
    def _check_payload(resp: ApiResponse) -> None:
        # The platform reports business errors as HTTP 200 with a non-zero code.
        if not isinstance(resp.body, dict):
            return
        code = resp.body.get('code')
        if code is None or code == 0:
            return
        message = resp.body.get('message', '')
        raise ApiError(f"API error code {code}: {str(message)[:200]}", status=resp.status, code=code, body=resp.body)


class ProductV202502Api:
    """Product API, version 202502."""
    SEARCH_PATH = '/product/202502/products/search'

    def __init__(self, client: TikTokShopClient):
        self.client = client

    def products_search_post(self, page_size: int, x_tts_access_token: str, content_type: str, page_token: Optional[str] = None, shop_cipher: Optional[str] = None, search_body: Optional[Dict[str, Any]] = None) -> ApiResponse:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ApiParameterError(f"page_size must be a positive integer, got {page_size!r}")
        if not isinstance(x_tts_access_token, str) or not x_tts_access_token.strip():
            raise ApiParameterError('x_tts_access_token required')
        if not content_type:
            raise ApiParameterError('content_type required')
        params = {
            'page_size': page_size,
            'page_token': page_token,
            'shop_cipher': shop_cipher,
        }
        return self.client.call('POST', self.SEARCH_PATH, access_token=x_tts_access_token, content_type=content_type, params=params, body=search_body)

    ProductsSearchPost = products_search_post


class ApiGroups:
    """Namespaced call groups exposed as ``client.api``."""

    def __init__(self, client: TikTokShopClient):
        self.ProductV202502Api = ProductV202502Api(client)
        self.product_v202502 = self.ProductV202502Api
