"""
Paginated fetcher for the license dataset.

Intent:
- Translate the filter criteria into a where clause once per session.
- Request pages of at most ``page_size`` records with increasing offsets,
  shrinking the last page so a global ``limit`` is never exceeded.
- Push records one at a time onto a bounded channel so the consumer applies
  backpressure, and report the single terminal error (if any) on a separate
  error channel.
- Observe a cancellation token at loop boundaries, during the HTTP call and
  while blocked on a full channel.
- Bound each page request, body included, by `timeout_seconds`.

A session ends in exactly one of four ways: limit reached, exhaustion (empty
page), an error, or cancellation. Both channels are closed in every case.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx
from pydantic import TypeAdapter, ValidationError

from license_search.config import DEFAULT_API_URL
from license_search.domain.models import FilterCriteria, LicenseRecord
from license_search.domain.query import build_where_clause
from license_search.errors import (
    DecodeError,
    LicenseSearchError,
    ProtocolError,
    RequestBuildError,
    SearchCancelled,
    TransportError,
)
from license_search.infrastructure.http_factory import build_page_params, create_async_client
from license_search.pipeline.abstract import SessionStats
from license_search.pipeline.cancellation import CancellationToken, race_cancel
from license_search.pipeline.channel import Channel
from license_search.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_PAGE_SIZE = 5000

# A `null` body decodes to None and is treated as an empty page.
_PAGE_ADAPTER: TypeAdapter[Optional[List[Dict[str, Any]]]] = TypeAdapter(
    Optional[List[Dict[str, Any]]]
)


def effective_page_size(page_size: int, limit: int, records_found: int) -> int:
    """
    Size of the next page request.

    With ``limit == 0`` (unlimited) this is always ``page_size``; otherwise it
    is capped by the records still missing to reach the limit, and drops to
    zero once the limit is met.
    """
    if limit <= 0:
        return page_size
    return max(min(page_size, limit - records_found), 0)


class PaginatedFetcher:
    """
    Fetch license records page by page and stream them onto a channel.

    The fetcher owns its HTTP client for the duration of ``run``. It never
    reads configuration itself; the token and limits are passed in.
    """

    def __init__(
        self,
        criteria: FilterCriteria,
        *,
        app_token: str,
        api_url: str = DEFAULT_API_URL,
        timeout_seconds: float = 30,
        limit: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.criteria = criteria
        self.where_clause = build_where_clause(criteria)
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self.limit = limit
        self.page_size = page_size
        self._app_token = app_token
        self._transport = transport

    @property
    def channel_capacity(self) -> int:
        """Records buffered without blocking: one full first page."""
        return effective_page_size(self.page_size, self.limit, 0)

    def open_channels(self) -> Tuple[Channel[LicenseRecord], Channel[LicenseSearchError]]:
        """
        Create the record and error channels sized for this fetcher.

        The error channel holds one item; a session reports at most one error.
        """
        records: Channel[LicenseRecord] = Channel(self.channel_capacity, name="records")
        errors: Channel[LicenseSearchError] = Channel(1, name="errors")
        return records, errors

    async def run(
        self,
        records: Channel[LicenseRecord],
        errors: Channel[LicenseSearchError],
        token: CancellationToken,
    ) -> SessionStats:
        """
        Run one session to completion and close both channels.

        Session errors are delivered on ``errors`` and never raised.
        """
        stats = SessionStats(pages=0, records=0, offset=0, outcome="exhausted")
        log.info(
            "[SESSION START] fetching license records",
            extra={
                "where": self.where_clause,
                "limit": self.limit,
                "page_size": self.page_size,
            },
        )
        try:
            async with create_async_client(
                self._app_token, self.timeout_seconds, transport=self._transport
            ) as client:
                stats["outcome"] = await self._fetch_pages(client, records, token, stats)
        except SearchCancelled as exc:
            stats["outcome"] = "cancelled"
            log.info(f"[SESSION CANCELLED] {exc.reason}", extra={"records": stats["records"]})
            await errors.send(exc)
        except LicenseSearchError as exc:
            stats["outcome"] = "error"
            log.info(
                f"[SESSION FAILED] {exc}",
                extra={"records": stats["records"], "error_type": type(exc).__name__},
            )
            await errors.send(exc)
        finally:
            records.close()
            errors.close()

        log.info(
            f"[SESSION END] {stats['outcome']}",
            extra={"pages": stats["pages"], "records": stats["records"]},
        )
        return stats

    async def _fetch_pages(
        self,
        client: httpx.AsyncClient,
        records: Channel[LicenseRecord],
        token: CancellationToken,
        stats: SessionStats,
    ) -> str:
        offset = 0
        records_found = 0
        while True:
            token.raise_if_cancelled()

            page_size = effective_page_size(self.page_size, self.limit, records_found)
            if page_size == 0:
                return "limit_reached"

            page = await self._fetch_page(client, page_size, offset, token)
            stats["pages"] += 1
            log.debug(
                f"[PAGE {stats['pages']}] received {len(page)} records",
                extra={"offset": offset, "requested": page_size},
            )
            if not page:
                return "exhausted"

            for record in page:
                await records.send(record, token)
                records_found += 1
                stats["records"] = records_found

            offset += len(page)
            stats["offset"] = offset

    async def _fetch_page(
        self,
        client: httpx.AsyncClient,
        page_size: int,
        offset: int,
        token: CancellationToken,
    ) -> List[LicenseRecord]:
        params = build_page_params(self.where_clause, page_size, offset)
        try:
            request = client.build_request("GET", self.api_url, params=params)
        except (httpx.InvalidURL, ValueError, TypeError) as exc:
            raise RequestBuildError(f"error creating HTTP request: {exc}") from exc

        try:
            response = await race_cancel(
                asyncio.wait_for(client.send(request), self.timeout_seconds), token
            )
        except httpx.RequestError as exc:
            raise TransportError(f"error making HTTP request: {exc}") from exc
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"error making HTTP request: no complete response within {self.timeout_seconds}s"
            ) from exc

        if response.status_code != httpx.codes.OK:
            raise ProtocolError(response.status_code, response.reason_phrase)

        try:
            page = _PAGE_ADAPTER.validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"error decoding response body: {exc}") from exc
        return page or []


__all__ = ["DEFAULT_PAGE_SIZE", "PaginatedFetcher", "effective_page_size"]
