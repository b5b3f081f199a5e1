"""
Exception hierarchy for the license search client.

Only ``ConfigurationError`` is fatal to the CLI. Every other error ends the
current fetch session and is delivered to the consumer on the error channel.
"""
from __future__ import annotations

from typing import Optional


class LicenseSearchError(Exception):
    """Base class for all license search errors."""


class ConfigurationError(LicenseSearchError):
    """Required configuration (e.g. the access token) is missing or invalid."""


class RequestBuildError(LicenseSearchError):
    """The HTTP request for a page could not be constructed."""


class TransportError(LicenseSearchError):
    """The HTTP request failed below the protocol level (DNS, connect, timeout)."""


class ProtocolError(LicenseSearchError):
    """The API answered with a non-200 status."""

    def __init__(self, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"api returned a non-200 status code: {status_code} {reason}")


class DecodeError(LicenseSearchError):
    """A page body could not be decoded into a list of records."""


class SearchCancelled(LicenseSearchError):
    """The session was cancelled before it finished."""

    def __init__(self, reason: Optional[str] = None) -> None:
        self.reason = reason or "cancelled"
        super().__init__(f"search cancelled: {self.reason}")


__all__ = [
    "ConfigurationError",
    "DecodeError",
    "LicenseSearchError",
    "ProtocolError",
    "RequestBuildError",
    "SearchCancelled",
    "TransportError",
]
