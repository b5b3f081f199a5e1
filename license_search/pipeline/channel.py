"""
Bounded, closable channel built on ``asyncio.Queue``.

The producer owns the channel: it sends items and closes it exactly once.
Receivers drain whatever is buffered and then get ``ChannelClosed``. Closing
never blocks, even when the buffer is full.
"""

from __future__ import annotations

import asyncio
from typing import Generic, Optional, TypeVar

from license_search.pipeline.cancellation import CancellationToken, race_cancel

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised by ``receive`` once the channel is closed and fully drained."""


class Channel(Generic[T]):
    def __init__(self, capacity: int, name: str = "channel") -> None:
        if capacity < 1:
            raise ValueError(f"channel capacity must be >= 1, got {capacity}")
        self.name = name
        self.capacity = capacity
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=capacity)
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def qsize(self) -> int:
        return self._queue.qsize()

    async def send(self, item: T, token: Optional[CancellationToken] = None) -> None:
        """
        Push ``item``, waiting for buffer space.

        With a token the wait is abortable: ``SearchCancelled`` is raised and
        the item is not delivered.
        """
        if self.closed:
            raise RuntimeError(f"send on closed channel '{self.name}'")
        if token is None:
            await self._queue.put(item)
            return
        token.raise_if_cancelled()
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            await race_cancel(self._queue.put(item), token)

    def close(self) -> None:
        self._closed.set()

    async def receive(self) -> T:
        """
        Return the next item, waiting if necessary.

        Raises ``ChannelClosed`` when the channel is closed and empty.
        """
        while True:
            try:
                return self._queue.get_nowait()
            except asyncio.QueueEmpty:
                pass
            if self.closed:
                raise ChannelClosed(self.name)

            getter = asyncio.ensure_future(self._queue.get())
            closer = asyncio.ensure_future(self._closed.wait())
            try:
                await asyncio.wait({getter, closer}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                closer.cancel()
                if not getter.done():
                    getter.cancel()
            if getter.done() and not getter.cancelled():
                return getter.result()

    def __aiter__(self) -> "Channel[T]":
        return self

    async def __anext__(self) -> T:
        try:
            return await self.receive()
        except ChannelClosed:
            raise StopAsyncIteration from None


__all__ = ["Channel", "ChannelClosed"]
