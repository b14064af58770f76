#!/usr/bin/env python
"""Bootstrap a TikTok Shop client and run a demonstration product search.

Library use:
    from tiktok_shop.initialize import get_client
    client = get_client()
    resp = client.api.ProductV202502Api.products_search_post(10, client.credentials.access_token, 'application/json')

Executable use (prints the response body as indented JSON):
    python -m tiktok_shop.initialize [--sandbox] [--env-file PATH]

Credentials come from TTS_APP_KEY, TTS_APP_SECRET and TTS_APP_ACCESS_TOKEN.
"""
from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from functools import lru_cache
from typing import Any, List, Optional, TextIO

from .base_client import ApiResponse
from .client import TikTokShopClient
from .config import ClientConfig, Credentials, config_from_env, load_credentials, load_env_file
from .exceptions import TikTokShopError

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 1
SEARCH_CONTENT_TYPE = 'application/json'


def build_client(credentials: Optional[Credentials] = None, config: Optional[ClientConfig] = None) -> TikTokShopClient:
    credentials = credentials or load_credentials()
    config = config or config_from_env()
    client = TikTokShopClient(credentials, config)
    logger.info("TikTok Shop client targeting %s", client.base_url)
    return client


@lru_cache(maxsize=None)
def get_client() -> TikTokShopClient:
    """Shared client, constructed on first use from the environment."""
    return build_client()


async def search_products(client: TikTokShopClient, access_token: str) -> ApiResponse:
    api = client.api.ProductV202502Api
    return await asyncio.to_thread(
        api.products_search_post,
        SEARCH_PAGE_SIZE,
        access_token,
        SEARCH_CONTENT_TYPE,
        None,
        None,
    )


async def main(client: Optional[TikTokShopClient] = None, credentials: Optional[Credentials] = None, out: Optional[TextIO] = None) -> Any:
    if client is None:
        client = build_client(credentials=credentials) if credentials is not None else get_client()
    resp = await search_products(client, client.credentials.access_token)
    out = out or sys.stdout
    out.write(json.dumps(resp.body, indent=2) + '\n')
    out.flush()
    return resp.body


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description='Run a TikTok Shop product search and print the response body')
    p.add_argument('--sandbox', action='store_true', help='Target the sandbox host')
    p.add_argument('--env-file', default='.env', help='Env file loaded before reading credentials')
    p.add_argument('--verbose', action='store_true')
    return p.parse_args(argv)


def run(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='[%(levelname)s] %(message)s')
    load_env_file(args.env_file)
    try:
        config = ClientConfig(sandbox=True) if args.sandbox else config_from_env()
        client = build_client(config=config)
        asyncio.run(main(client))
    except TikTokShopError as e:
        logger.error("Product search failed: %s", e)
        raise
    return 0


if __name__ == '__main__':
    sys.exit(run())
