"""
Orchestrator for one license search session.

Wires the paginated fetcher (producer task) to the result consumer through a
record channel and an error channel, and returns the consumer's tally.

Usage (example from CLI):
    from license_search.orchestrator import SearchConfig, search

    config = SearchConfig.from_settings(get_settings(), limit=10)
    summary = search(FilterCriteria(license_type="plumb"), config, ConsoleRenderer())
    print(summary["count"])
"""

from __future__ import annotations

import asyncio
import signal
import time
from dataclasses import dataclass
from typing import List, Optional

import httpx

from license_search.config import DEFAULT_API_URL, Settings
from license_search.domain.models import FilterCriteria
from license_search.pipeline.abstract import RecordRenderer, SearchSummary
from license_search.pipeline.cancellation import CancellationToken
from license_search.pipeline.consumer import ResultConsumer
from license_search.pipeline.fetcher import DEFAULT_PAGE_SIZE, PaginatedFetcher
from license_search.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class SearchConfig:
    """
    Everything a session needs besides the criteria. The token is resolved by
    the caller; nothing here reads the environment.
    """

    app_token: str
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = 30
    limit: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        limit: int = 0,
        timeout_seconds: Optional[float] = None,
    ) -> "SearchConfig":
        return cls(
            app_token=settings.require_app_token(),
            api_url=settings.api_url,
            timeout_seconds=timeout_seconds or settings.timeout_seconds,
            limit=limit,
            page_size=settings.page_size,
        )


async def run_search(
    criteria: FilterCriteria,
    config: SearchConfig,
    renderer: RecordRenderer,
    *,
    token: Optional[CancellationToken] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SearchSummary:
    """
    Run the fetcher and consumer concurrently and return the final summary.

    Parameters
    ----------
    criteria : FilterCriteria
        Substring filters for the where clause.
    config : SearchConfig
        Token, endpoint, timeout, limit and page size.
    renderer : RecordRenderer
        Sink for each consumed record and error.
    token : CancellationToken | None
        Cancellation signal observed by the fetcher. A fresh one is used if None.
    transport : httpx.AsyncBaseTransport | None
        HTTP transport override (tests).
    """
    token = token or CancellationToken()
    fetcher = PaginatedFetcher(
        criteria,
        app_token=config.app_token,
        api_url=config.api_url,
        timeout_seconds=config.timeout_seconds,
        limit=config.limit,
        page_size=config.page_size,
        transport=transport,
    )
    records, errors = fetcher.open_channels()

    start = time.perf_counter()
    fetch_task = asyncio.create_task(fetcher.run(records, errors, token), name="license-fetcher")
    try:
        summary = await ResultConsumer(renderer).drain(records, errors)
    except BaseException:
        token.cancel("consumer stopped")
        await asyncio.gather(fetch_task, return_exceptions=True)
        raise

    summary["session"] = await fetch_task
    summary["duration_seconds"] = round(time.perf_counter() - start, 3)
    log.info(
        f"[SEARCH COMPLETE] {summary['count']} records",
        extra={"errors": len(summary["errors"]), "duration": summary["duration_seconds"]},
    )
    return summary


async def _run_with_signal_handlers(
    criteria: FilterCriteria,
    config: SearchConfig,
    renderer: RecordRenderer,
    transport: Optional[httpx.AsyncBaseTransport],
) -> SearchSummary:
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    installed: List[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, token.cancel, f"received {sig.name}")
            installed.append(sig)
        except (NotImplementedError, RuntimeError, ValueError):
            log.debug(f"Signal handler for {sig.name} unavailable on this platform/thread")
    try:
        return await run_search(criteria, config, renderer, token=token, transport=transport)
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def search(
    criteria: FilterCriteria,
    config: SearchConfig,
    renderer: RecordRenderer,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SearchSummary:
    """
    Synchronous entry point: run one session in a fresh event loop.

    SIGINT/SIGTERM cancel the session instead of killing the process, so the
    final count still gets reported. Must not be called from a running loop;
    use ``run_search`` there.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError(
            "search() cannot be called from an async context; await run_search() instead"
        )
    return asyncio.run(_run_with_signal_handlers(criteria, config, renderer, transport))


__all__ = ["SearchConfig", "run_search", "search"]
