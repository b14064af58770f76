import json
from unittest.mock import patch

import pytest
import requests

from tiktok_shop.config import ACCESS_TOKEN_ENV, APP_KEY_ENV, APP_SECRET_ENV, SANDBOX_ENV
from tiktok_shop import initialize

SUCCESS_BODY = {'code': 0, 'data': {'products': []}}


def make_response(status=200, body=None, content_type='application/json'):
    resp = requests.Response()
    resp.status_code = status
    resp.encoding = 'utf-8'
    resp.headers['Content-Type'] = content_type
    payload = body if isinstance(body, (str, bytes)) else json.dumps(body if body is not None else {})
    resp._content = payload.encode('utf-8') if isinstance(payload, str) else payload
    return resp


@pytest.fixture(autouse=True)
def _fresh_shared_client():
    initialize.get_client.cache_clear()
    yield
    initialize.get_client.cache_clear()


@pytest.fixture
def tts_env(monkeypatch):
    monkeypatch.setenv(APP_KEY_ENV, 'test-app-key')
    monkeypatch.setenv(APP_SECRET_ENV, 'test-app-secret')
    monkeypatch.setenv(ACCESS_TOKEN_ENV, 'test-access-token')
    monkeypatch.delenv(SANDBOX_ENV, raising=False)
    return monkeypatch


@pytest.fixture
def transport():
    """Session.request spy returning a canned success body unless reconfigured."""
    with patch.object(requests.Session, 'request', return_value=make_response(200, SUCCESS_BODY)) as spy:
        yield spy
