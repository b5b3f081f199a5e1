"""
Result consumer: drains the record and error channels concurrently.

The consumer keeps one pending receive per open channel and waits on whichever
completes first, select-style. A channel is dropped from the wait set once it
reports closed; draining stops only when both are gone, so no record or error
is ever left behind.
"""

from __future__ import annotations

import asyncio
from typing import Dict, List

from license_search.domain.models import LicenseRecord
from license_search.errors import LicenseSearchError, SearchCancelled
from license_search.pipeline.abstract import RecordRenderer, SearchSummary
from license_search.pipeline.channel import Channel, ChannelClosed
from license_search.utils.logging import get_logger

log = get_logger(__name__)


class ResultConsumer:
    def __init__(self, renderer: RecordRenderer) -> None:
        self.renderer = renderer

    async def drain(
        self,
        records: Channel[LicenseRecord],
        errors: Channel[LicenseSearchError],
    ) -> SearchSummary:
        count = 0
        seen_errors: List[str] = []
        cancelled = False

        open_channels: Dict[str, Channel] = {"records": records, "errors": errors}
        receivers: Dict[str, asyncio.Future] = {}
        try:
            while open_channels:
                for key, channel in open_channels.items():
                    if key not in receivers:
                        receivers[key] = asyncio.ensure_future(channel.receive())

                done, _ = await asyncio.wait(
                    receivers.values(), return_when=asyncio.FIRST_COMPLETED
                )
                for key in [k for k, fut in receivers.items() if fut in done]:
                    future = receivers.pop(key)
                    try:
                        item = future.result()
                    except ChannelClosed:
                        log.debug(f"[CONSUMER] {key} channel closed")
                        del open_channels[key]
                        continue

                    if key == "records":
                        count += 1
                        self.renderer.render_record(item)
                    else:
                        seen_errors.append(str(item))
                        cancelled = cancelled or isinstance(item, SearchCancelled)
                        self.renderer.render_error(item)
        finally:
            for future in receivers.values():
                future.cancel()

        return SearchSummary(count=count, errors=seen_errors, cancelled=cancelled)


__all__ = ["ResultConsumer"]
