"""
HTTP client factory for the license dataset API.

Centralizes how the async httpx client is built (timeout, headers, optional
transport override for tests) and how page query parameters are encoded.
The fetcher owns the client it gets from here and closes it when its session
ends.
"""

from __future__ import annotations

from typing import Dict, Optional

import httpx

TOKEN_HEADER = "X-App-Token"

WHERE_PARAM = "$where"
LIMIT_PARAM = "$limit"
OFFSET_PARAM = "$offset"


def build_headers(app_token: str) -> Dict[str, str]:
    return {
        "Accept": "application/json",
        TOKEN_HEADER: app_token,
    }


def build_page_params(where_clause: str, page_size: int, offset: int) -> Dict[str, str]:
    """
    Encode one page request. The where parameter is omitted when empty.
    """
    params: Dict[str, str] = {}
    if where_clause:
        params[WHERE_PARAM] = where_clause
    params[LIMIT_PARAM] = str(page_size)
    params[OFFSET_PARAM] = str(offset)
    return params


def create_async_client(
    app_token: str,
    timeout_seconds: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Build an AsyncClient carrying the auth/accept headers on every request.

    Parameters
    ----------
    app_token : str
        Access token forwarded in the ``X-App-Token`` header.
    timeout_seconds : float
        Timeout applied to connect, read, write and pool acquisition.
    transport : httpx.AsyncBaseTransport | None
        Transport override, e.g. ``httpx.MockTransport`` in tests.
    """
    return httpx.AsyncClient(
        headers=build_headers(app_token),
        timeout=httpx.Timeout(timeout_seconds),
        transport=transport,
    )


__all__ = [
    "LIMIT_PARAM",
    "OFFSET_PARAM",
    "TOKEN_HEADER",
    "WHERE_PARAM",
    "build_headers",
    "build_page_params",
    "create_async_client",
]
