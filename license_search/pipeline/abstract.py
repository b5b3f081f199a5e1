"""
Interfaces and result contracts shared by the search pipeline.

Renderers implement ``RecordRenderer`` so the consumer stays independent of how
records are displayed. ``SearchSummary`` and ``SessionStats`` standardize what
the consumer and fetcher hand back to the orchestrator.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, TypedDict, runtime_checkable

from license_search.domain.models import LicenseRecord


class SessionStats(TypedDict, total=False):
    """
    Bookkeeping for one fetch session.

    ``outcome`` is one of: "limit_reached", "exhausted", "error", "cancelled".
    """

    pages: int
    records: int
    offset: int
    outcome: str


class SearchSummary(TypedDict, total=False):
    """
    Final tally reported after both channels close.
    """

    count: int
    errors: List[str]
    cancelled: bool
    duration_seconds: float
    session: Optional[SessionStats]


@runtime_checkable
class RecordRenderer(Protocol):
    """
    Display sink for consumed records and errors.
    """

    def render_record(self, record: LicenseRecord) -> None:
        """Render one license record."""
        ...

    def render_error(self, error: BaseException) -> None:
        """Render one session error."""
        ...


__all__ = ["RecordRenderer", "SearchSummary", "SessionStats"]
