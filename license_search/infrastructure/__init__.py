"""
Infrastructure package for the license search client.

Centralizes HTTP connectivity concerns. Keep this layer focused on I/O
setup, decoupled from pagination and consumer logic.
"""

from license_search.infrastructure.http_factory import (
    build_headers,
    build_page_params,
    create_async_client,
)

__all__ = [
    "build_headers",
    "build_page_params",
    "create_async_client",
]
