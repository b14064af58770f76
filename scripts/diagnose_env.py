#!/usr/bin/env python
"""Environment & connectivity diagnostics for the TikTok Shop client.

Usage:
  python scripts/diagnose_env.py [--ping] [--sandbox] [--env-file PATH]

Without flags runs credential presence checks. Use --ping to issue one product search.
"""
from __future__ import annotations
import argparse
import os
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tiktok_shop.config import CREDENTIAL_VARS, SANDBOX_ENV, ClientConfig, config_from_env, load_env_file
from tiktok_shop.exceptions import ApiAuthError, TikTokShopError
from tiktok_shop.initialize import SEARCH_CONTENT_TYPE, SEARCH_PAGE_SIZE, build_client


def mask(val: str | None) -> str | None:
    if not val:
        return val
    if len(val) <= 6:
        return '*' * len(val)
    return val[:4] + '...' + val[-4:]


def check_presence(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    env = os.environ if environ is None else environ
    report: Dict[str, str] = {}
    for k in CREDENTIAL_VARS:
        v = env.get(k)
        report[k] = 'OK' if v and v.strip() else 'MISSING'
    return report


def print_report(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    presence = check_presence(env)
    print('\n[VARIABLE PRESENCE]')
    widest = max(len(k) for k in CREDENTIAL_VARS)
    for k, status in presence.items():
        print(f"  {k.ljust(widest)} : {status:<8} {'' if status != 'OK' else mask(env.get(k))}")
    print(f"\n[TARGET] {SANDBOX_ENV}={env.get(SANDBOX_ENV, '') or '(unset)'} -> {config_from_env(env).resolved_base_url}\n")
    return all(s == 'OK' for s in presence.values())


def ping(config: ClientConfig) -> int:
    try:
        client = build_client(config=config)
        resp = client.api.ProductV202502Api.products_search_post(SEARCH_PAGE_SIZE, client.credentials.access_token, SEARCH_CONTENT_TYPE)
    except ApiAuthError as e:
        print(f"[search] Status: {e.status}")
        print('HINT 401/403: Invalid or expired access token, or app not authorized for this shop.')
        return 1
    except TikTokShopError as e:
        print(f"[search] ERROR: {e}")
        return 1
    print(f"[search] Status: {resp.status}")
    return 0


def main(argv: List[str]) -> int:
    p = argparse.ArgumentParser(description='Check TikTok Shop credentials and connectivity')
    p.add_argument('--ping', action='store_true', help='Issue one product search')
    p.add_argument('--sandbox', action='store_true')
    p.add_argument('--env-file', default=str(PROJECT_ROOT / '.env'))
    args = p.parse_args(argv[1:])
    load_env_file(args.env_file)
    complete = print_report()
    if not args.ping:
        return 0 if complete else 1
    if not complete:
        print('[search] Skipping connectivity test (missing credentials)')
        return 1
    config = ClientConfig(sandbox=True) if args.sandbox else config_from_env()
    return ping(config)


if __name__ == '__main__':
    sys.exit(main(sys.argv))
