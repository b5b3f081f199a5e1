from __future__ import annotations

import asyncio

import pytest

from license_search.errors import ProtocolError, SearchCancelled
from license_search.pipeline.channel import Channel
from license_search.pipeline.consumer import ResultConsumer


@pytest.mark.asyncio
async def test_drain_counts_and_renders_every_record(renderer, make_records):
    records: Channel = Channel(10)
    errors: Channel = Channel(1)
    dataset = make_records(4)
    for record in dataset:
        await records.send(record)
    records.close()
    errors.close()

    summary = await ResultConsumer(renderer).drain(records, errors)

    assert summary["count"] == 4
    assert summary["errors"] == []
    assert summary["cancelled"] is False
    assert renderer.records == dataset


@pytest.mark.asyncio
async def test_drain_waits_for_errors_after_records_close(renderer, make_records):
    records: Channel = Channel(2)
    errors: Channel = Channel(1)

    async def produce() -> None:
        for record in make_records(2):
            await records.send(record)
        records.close()
        await asyncio.sleep(0.01)
        await errors.send(ProtocolError(500, "Internal Server Error"))
        errors.close()

    producer = asyncio.create_task(produce())
    summary = await asyncio.wait_for(ResultConsumer(renderer).drain(records, errors), timeout=1)
    await producer

    assert summary["count"] == 2
    assert summary["errors"] == ["api returned a non-200 status code: 500 Internal Server Error"]
    assert len(renderer.errors) == 1


@pytest.mark.asyncio
async def test_drain_keeps_reading_records_after_errors_close(renderer, make_records):
    records: Channel = Channel(1)
    errors: Channel = Channel(1)
    dataset = make_records(3)

    async def produce() -> None:
        errors.close()
        for record in dataset:
            await records.send(record)
            await asyncio.sleep(0)
        records.close()

    producer = asyncio.create_task(produce())
    summary = await asyncio.wait_for(ResultConsumer(renderer).drain(records, errors), timeout=1)
    await producer

    assert summary["count"] == 3
    assert renderer.records == dataset


@pytest.mark.asyncio
async def test_drain_flags_cancellation(renderer):
    records: Channel = Channel(1)
    errors: Channel = Channel(1)
    await errors.send(SearchCancelled("received SIGINT"))
    records.close()
    errors.close()

    summary = await ResultConsumer(renderer).drain(records, errors)

    assert summary["count"] == 0
    assert summary["cancelled"] is True
    assert summary["errors"] == ["search cancelled: received SIGINT"]
