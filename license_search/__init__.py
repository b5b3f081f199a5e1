"""
License Search - command-line client for the Texas professional license dataset.

This package queries the state's open-data API with case-insensitive substring
filters, pages through the results and streams them to the terminal:

- Where-clause construction from filter criteria
- Paginated fetching with a global record limit
- A bounded channel pipeline between fetcher and consumer
- Cooperative cancellation (Ctrl-C ends the session, the count is still reported)
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from license_search.config import Settings, get_settings
from license_search.domain import FilterCriteria, build_where_clause
from license_search.errors import (
    ConfigurationError,
    DecodeError,
    LicenseSearchError,
    ProtocolError,
    RequestBuildError,
    SearchCancelled,
    TransportError,
)
from license_search.orchestrator import SearchConfig, run_search, search
from license_search.pipeline import (
    CancellationToken,
    Channel,
    PaginatedFetcher,
    RecordRenderer,
    ResultConsumer,
    SearchSummary,
)
from license_search.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "FilterCriteria",
    "build_where_clause",
    # Errors
    "ConfigurationError",
    "DecodeError",
    "LicenseSearchError",
    "ProtocolError",
    "RequestBuildError",
    "SearchCancelled",
    "TransportError",
    # Orchestration
    "SearchConfig",
    "run_search",
    "search",
    # Pipeline
    "CancellationToken",
    "Channel",
    "PaginatedFetcher",
    "RecordRenderer",
    "ResultConsumer",
    "SearchSummary",
    # Logging
    "configure_logging",
    "get_logger",
]
