from __future__ import annotations

import asyncio

import pytest

from canvas_api_client.core.errors import CanvasServerError
from canvas_api_client.core.streams import ErrorStream, ItemStream


async def _drain(stream: ItemStream[int]) -> list[int]:
    return [item async for item in stream]


@pytest.mark.asyncio
async def test_item_stream_delivers_items_in_order_then_ends():
    stream: ItemStream[int] = ItemStream(capacity=4)
    for value in (1, 2, 3):
        assert await stream.put(value) is True
    await stream.close()

    assert await _drain(stream) == [1, 2, 3]
    assert await _drain(stream) == []


@pytest.mark.asyncio
async def test_item_stream_rejects_put_after_close():
    stream: ItemStream[int] = ItemStream()
    await stream.close()
    with pytest.raises(RuntimeError):
        await stream.put(1)


def test_item_stream_rejects_zero_capacity():
    with pytest.raises(ValueError):
        ItemStream(capacity=0)


@pytest.mark.asyncio
async def test_item_stream_put_waits_until_item_is_taken():
    stream: ItemStream[int] = ItemStream(capacity=1)
    first = asyncio.create_task(stream.put(1))
    await asyncio.sleep(0)
    assert not first.done()

    assert await anext(stream) == 1
    assert await first is True


@pytest.mark.asyncio
async def test_item_stream_put_returns_while_buffer_has_room():
    stream: ItemStream[int] = ItemStream(capacity=3)
    assert await stream.put(1) is True
    assert await stream.put(2) is True
    third = asyncio.create_task(stream.put(3))
    await asyncio.sleep(0)
    assert not third.done()

    assert await anext(stream) == 1
    assert await third is True
    assert await anext(stream) == 2
    assert await anext(stream) == 3


@pytest.mark.asyncio
async def test_item_stream_cancel_releases_waiting_producer():
    stream: ItemStream[int] = ItemStream(capacity=1)
    pending = asyncio.create_task(stream.put(1))
    await asyncio.sleep(0)
    stream.cancel()

    assert await asyncio.wait_for(pending, timeout=1) is False


@pytest.mark.asyncio
async def test_item_stream_cancel_wakes_blocked_consumer():
    stream: ItemStream[int] = ItemStream()
    consumer = asyncio.create_task(_drain(stream))
    await asyncio.sleep(0)
    stream.cancel()

    assert await asyncio.wait_for(consumer, timeout=1) == []
    assert stream.cancelled is True
    assert await stream.put(5) is False


@pytest.mark.asyncio
async def test_item_stream_cancel_drops_buffered_items():
    stream: ItemStream[int] = ItemStream(capacity=4)
    await stream.put(1)
    await stream.put(2)
    stream.cancel()

    assert await _drain(stream) == []


@pytest.mark.asyncio
async def test_item_stream_failure_is_raised_once():
    stream: ItemStream[int] = ItemStream()
    stream.fail(CanvasServerError("boom"))

    with pytest.raises(CanvasServerError):
        await anext(stream)
    assert await _drain(stream) == []


@pytest.mark.asyncio
async def test_item_stream_aclose_cancels_producer():
    stream: ItemStream[int] = ItemStream()

    async def produce() -> None:
        value = 0
        while await stream.put(value):
            value += 1

    producer = asyncio.create_task(produce())
    stream.bind_producer(producer)
    async with stream:
        assert await anext(stream) == 0

    await asyncio.wait([producer], timeout=1)
    assert producer.done()


@pytest.mark.asyncio
async def test_item_stream_waits_for_guard_before_reporting_end():
    stream: ItemStream[int] = ItemStream()
    release = asyncio.Event()

    async def guard() -> None:
        await release.wait()
        stream.fail(CanvasServerError("late"))

    stream.bind_guard(asyncio.create_task(guard()))
    await stream.close()
    consumer = asyncio.create_task(_drain(stream))
    await asyncio.sleep(0)
    assert not consumer.done()

    release.set()
    with pytest.raises(CanvasServerError, match="late"):
        await consumer


@pytest.mark.asyncio
async def test_error_stream_delivers_single_error():
    errors = ErrorStream()
    err = CanvasServerError("boom")
    errors.send(err)

    assert await errors.get() is err
    assert await errors.get() is None
    assert errors.closed is True


@pytest.mark.asyncio
async def test_error_stream_second_send_is_rejected():
    errors = ErrorStream()
    errors.send(CanvasServerError("first"))
    with pytest.raises(RuntimeError):
        errors.send(CanvasServerError("second"))


@pytest.mark.asyncio
async def test_error_stream_close_resolves_to_none():
    errors = ErrorStream()
    waiter = asyncio.create_task(errors.get())
    await asyncio.sleep(0)
    errors.close()

    assert await waiter is None
    assert errors.closed is True
    assert [error async for error in errors] == []
