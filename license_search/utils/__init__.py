"""
Utilities package for the license search client.

Exports shared helpers for cross-cutting concerns. Keep this package free of
domain-specific logic.
"""

from license_search.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
