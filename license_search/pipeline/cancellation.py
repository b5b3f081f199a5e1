"""
Cooperative cancellation for fetch sessions.

A ``CancellationToken`` is threaded through every suspension point of the
fetcher (the in-flight HTTP call and each channel send). ``race_cancel`` runs
an awaitable against the token and aborts it as soon as the token fires.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Optional, TypeVar

from license_search.errors import SearchCancelled

T = TypeVar("T")


class CancellationToken:
    """One-shot cancellation signal with an optional reason."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        """Fire the token. Later calls keep the first reason."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise SearchCancelled(self._reason)


async def race_cancel(awaitable: Awaitable[T], token: CancellationToken) -> T:
    """
    Await ``awaitable`` unless ``token`` fires first.

    When the token wins the awaitable is cancelled and ``SearchCancelled`` is
    raised. When both complete together the awaitable's result wins.
    """
    if token.cancelled:
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise SearchCancelled(token.reason)
    work = asyncio.ensure_future(awaitable)
    watcher = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watcher.cancel()
        if not work.done():
            work.cancel()
            await asyncio.gather(work, return_exceptions=True)
    if work.cancelled():
        raise SearchCancelled(token.reason)
    return work.result()


__all__ = ["CancellationToken", "race_cancel"]
