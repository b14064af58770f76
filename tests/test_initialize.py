import importlib
import json
from unittest.mock import MagicMock, patch

import pytest

from tiktok_shop import initialize
from tiktok_shop.base_client import ApiResponse
from tiktok_shop.client import ProductV202502Api
from tiktok_shop.config import ACCESS_TOKEN_ENV, APP_KEY_ENV, APP_SECRET_ENV, PRODUCTION_BASE_URL, SANDBOX_BASE_URL, Credentials
from tiktok_shop.exceptions import ApiAuthError, MissingCredential

from .conftest import SUCCESS_BODY, make_response


@pytest.mark.asyncio
@pytest.mark.parametrize('variable', [APP_KEY_ENV, APP_SECRET_ENV, ACCESS_TOKEN_ENV])
@pytest.mark.parametrize('unset', [True, False])
async def test_missing_credential_fails_before_any_call(tts_env, transport, capsys, variable, unset):
    if unset:
        tts_env.delenv(variable)
    else:
        tts_env.setenv(variable, '')
    with pytest.raises(MissingCredential) as exc:
        await initialize.main()
    assert exc.value.variable == variable
    transport.assert_not_called()
    assert capsys.readouterr().out == ''


@pytest.mark.asyncio
async def test_prints_body_with_two_space_indent(tts_env, transport, capsys):
    body = await initialize.main()
    assert body == SUCCESS_BODY
    assert capsys.readouterr().out == json.dumps(SUCCESS_BODY, indent=2) + '\n'
    transport.assert_called_once()


@pytest.mark.asyncio
async def test_error_status_propagates(tts_env, transport, capsys):
    transport.return_value = make_response(401, {'code': 105002, 'message': 'Expired credentials'})
    with pytest.raises(ApiAuthError):
        await initialize.main()
    assert capsys.readouterr().out == ''


@pytest.mark.asyncio
async def test_search_called_with_literal_arguments(tts_env):
    fake = MagicMock(return_value=ApiResponse(status=200, body=SUCCESS_BODY))
    with patch.object(ProductV202502Api, 'products_search_post', fake):
        await initialize.main()
    fake.assert_called_once_with(1, 'test-access-token', 'application/json', None, None)


@pytest.mark.asyncio
async def test_main_accepts_explicit_client(tts_env, transport):
    client = initialize.build_client()
    out = MagicMock()
    await initialize.main(client, out=out)
    out.write.assert_called_once_with(json.dumps(SUCCESS_BODY, indent=2) + '\n')


def test_build_client_sandbox_selection(tts_env):
    assert initialize.build_client().base_url == PRODUCTION_BASE_URL
    tts_env.setenv('TTS_SANDBOX', 'true')
    assert initialize.build_client().base_url == SANDBOX_BASE_URL


def test_shared_client_is_cached(tts_env, transport):
    first = initialize.get_client()
    assert initialize.get_client() is first
    transport.assert_not_called()


def test_import_does_not_call_or_construct(tts_env, transport):
    module = importlib.reload(initialize)
    transport.assert_not_called()
    assert module.get_client.cache_info().currsize == 0


def test_run_prints_and_exits_zero(tts_env, transport, capsys, tmp_path):
    assert initialize.run(['--env-file', str(tmp_path / 'missing.env')]) == 0
    out = capsys.readouterr().out
    assert json.loads(out) == SUCCESS_BODY
    assert transport.call_args.args[1].startswith(PRODUCTION_BASE_URL)


def test_run_sandbox_flag(tts_env, transport, tmp_path):
    initialize.run(['--sandbox', '--env-file', str(tmp_path / 'missing.env')])
    assert transport.call_args.args[1].startswith(SANDBOX_BASE_URL)


def test_run_reads_env_file(tts_env, transport, tmp_path, capsys):
    tts_env.setenv(ACCESS_TOKEN_ENV, 'placeholder')
    tts_env.delenv(ACCESS_TOKEN_ENV)
    env_file = tmp_path / '.env'
    env_file.write_text(f"{ACCESS_TOKEN_ENV}=file-token\n", encoding='utf-8')
    initialize.run(['--env-file', str(env_file)])
    assert transport.call_args.kwargs['headers']['x-tts-access-token'] == 'file-token'


def test_run_propagates_failures(tts_env, transport, tmp_path, capsys):
    tts_env.delenv(APP_SECRET_ENV)
    with pytest.raises(MissingCredential):
        initialize.run(['--env-file', str(tmp_path / 'missing.env')])
    transport.assert_not_called()
    assert capsys.readouterr().out == ''


@pytest.mark.asyncio
async def test_blank_explicit_credentials_fail_before_any_call(transport, capsys):
    with pytest.raises(MissingCredential) as exc:
        await initialize.main(credentials=Credentials('', '', 'tok'))
    assert exc.value.variable == APP_KEY_ENV
    transport.assert_not_called()
    assert capsys.readouterr().out == ''


@pytest.mark.asyncio
async def test_main_builds_client_from_explicit_credentials(transport, monkeypatch, capsys):
    for name in (APP_KEY_ENV, APP_SECRET_ENV, ACCESS_TOKEN_ENV):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv('TTS_SANDBOX', raising=False)
    body = await initialize.main(credentials=Credentials('key', 'secret', 'explicit-token'))
    assert body == SUCCESS_BODY
    assert transport.call_args.kwargs['headers']['x-tts-access-token'] == 'explicit-token'
    assert transport.call_args.kwargs['params']['app_key'] == 'key'
    assert initialize.get_client.cache_info().currsize == 0


@pytest.mark.asyncio
async def test_non_json_body_printed_as_json_string(tts_env, transport, capsys):
    transport.return_value = make_response(200, 'plain text', content_type='text/plain')
    body = await initialize.main()
    assert body == 'plain text'
    assert capsys.readouterr().out == '"plain text"\n'
