"""
Search pipeline package.

Re-exports the fetcher/consumer pair and the channel and cancellation
primitives they communicate through.
"""

from license_search.pipeline.abstract import RecordRenderer, SearchSummary, SessionStats
from license_search.pipeline.cancellation import CancellationToken, race_cancel
from license_search.pipeline.channel import Channel, ChannelClosed
from license_search.pipeline.consumer import ResultConsumer
from license_search.pipeline.fetcher import (
    DEFAULT_PAGE_SIZE,
    PaginatedFetcher,
    effective_page_size,
)

__all__ = [
    # Contracts
    "RecordRenderer",
    "SearchSummary",
    "SessionStats",
    # Primitives
    "CancellationToken",
    "Channel",
    "ChannelClosed",
    "race_cancel",
    # Components
    "DEFAULT_PAGE_SIZE",
    "PaginatedFetcher",
    "ResultConsumer",
    "effective_page_size",
]
