from __future__ import annotations
import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import MissingCredential

logger = logging.getLogger(__name__)

APP_KEY_ENV = 'TTS_APP_KEY'
APP_SECRET_ENV = 'TTS_APP_SECRET'
ACCESS_TOKEN_ENV = 'TTS_APP_ACCESS_TOKEN'
SANDBOX_ENV = 'TTS_SANDBOX'

CREDENTIAL_VARS = (APP_KEY_ENV, APP_SECRET_ENV, ACCESS_TOKEN_ENV)

PRODUCTION_BASE_URL = 'https://open-api.tiktokglobalshop.com'
SANDBOX_BASE_URL = 'https://open-api-sandbox.tiktokglobalshop.com'

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class Credentials:
    app_key: str
    app_secret: str
    access_token: str

    def __post_init__(self):
        for field_name, env_name in zip(('app_key', 'app_secret', 'access_token'), CREDENTIAL_VARS):
            value = getattr(self, field_name)
            if not isinstance(value, str) or value.strip() == '':
                raise MissingCredential(env_name)

    def __repr__(self) -> str:
        return f"Credentials(app_key={self.app_key!r}, app_secret='***', access_token='***')"


@dataclass(frozen=True)
class ClientConfig:
    """Target selection and transport options for a client.

    ``base_url`` overrides the host picked by ``sandbox``; it is meant for
    tests and proxies.
    """
    sandbox: bool = False
    timeout: int = 30
    base_url: Optional[str] = None

    @property
    def resolved_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip('/')
        return SANDBOX_BASE_URL if self.sandbox else PRODUCTION_BASE_URL


def require_env(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    val = env.get(name)
    if val is None or val.strip() == '':
        raise MissingCredential(name)
    return val.strip()


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """Read app key, app secret and access token; the first missing one is reported."""
    app_key = require_env(APP_KEY_ENV, environ)
    app_secret = require_env(APP_SECRET_ENV, environ)
    access_token = require_env(ACCESS_TOKEN_ENV, environ)
    return Credentials(app_key, app_secret, access_token)


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    env = os.environ if environ is None else environ
    raw = env.get(SANDBOX_ENV, '')
    return ClientConfig(sandbox=raw.strip().lower() in _TRUTHY)


def load_env_file(path: str | Path | None = None) -> bool:
    # Variables already present in the environment win over the file.
    env_path = Path(path) if path is not None else Path('.env')
    if not env_path.exists():
        logger.debug("No env file at %s", env_path)
        return False
    return load_dotenv(env_path, override=False)
