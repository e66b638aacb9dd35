from __future__ import annotations

import os
from typing import Dict, Optional

import httpx

from bgpview import __version__


_DEFAULT_UA = f"bgpview-client/{__version__}"


def _user_agent() -> str:
    value = os.getenv("BGPVIEW_USER_AGENT")
    if value:
        ua = value.strip()
        if ua:
            return ua
    return _DEFAULT_UA


def default_headers(user_agent: Optional[str] = None) -> Dict[str, str]:
    return {
        "User-Agent": user_agent or _user_agent(),
        "Accept": "application/json",
    }


def create_client(
    timeout: float = 5.0,
    *,
    user_agent: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=0, http2=True)
    return httpx.AsyncClient(
        headers=default_headers(user_agent),
        timeout=httpx.Timeout(timeout),
        transport=transport,
        follow_redirects=False,
        verify=True,
    )
