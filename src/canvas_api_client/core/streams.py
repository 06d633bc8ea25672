"""Item and error streams shared between a paginator and its consumer."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass
from types import TracebackType
from typing import Generic, TypeVar

T = TypeVar("T")

_END = object()


class ItemStream(AsyncIterator[T], Generic[T]):
    """Bounded asynchronous stream of decoded items.

    The producer pushes with :meth:`put` and finishes with :meth:`close`. The
    consumer iterates with ``async for``. A cancelled stream ends every pending
    and future iteration silently; a failed stream raises its failure once.
    Consumers that stop early should use ``async with`` or :meth:`aclose` so
    the producer is released.

    :meth:`put` returns only while fewer than ``capacity`` items are unread, so
    with ``capacity=1`` each push waits until the consumer has taken the item.
    """

    def __init__(self, capacity: int = 1) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=capacity)
        self._closed = False
        self._cancelled = False
        self._failure: BaseException | None = None
        self._producer: asyncio.Task[None] | None = None
        self._guard: asyncio.Task[None] | None = None
        self._taken = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def bind_producer(self, task: asyncio.Task[None]) -> None:
        self._producer = task

    def bind_guard(self, task: asyncio.Task[None]) -> None:
        """Register a task that must finish before exhaustion is reported."""

        self._guard = task

    async def put(self, item: T) -> bool:
        """Push one item; returns ``False`` once the consumer has cancelled."""

        if self._cancelled:
            return False
        if self._closed:
            raise RuntimeError("item stream is closed")
        await self._queue.put(item)
        # A full buffer holds the producer until the consumer takes an item.
        while self._queue.full() and not self._cancelled:
            self._taken.clear()
            await self._taken.wait()
        return not self._cancelled

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._cancelled:
            return
        await self._queue.put(_END)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._wake_consumer()
        self._taken.set()
        if self._producer is not None and not self._producer.done():
            self._producer.cancel()

    def fail(self, exc: BaseException) -> None:
        self._failure = exc
        self.cancel()

    async def aclose(self) -> None:
        self.cancel()

    def _wake_consumer(self) -> None:
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_END)

    def _raise_failure(self) -> None:
        failure = self._failure
        if failure is not None:
            self._failure = None
            raise failure

    def __aiter__(self) -> "ItemStream[T]":
        return self

    async def __anext__(self) -> T:
        if self._cancelled:
            self._raise_failure()
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _END:
            # A failing stream may still be resolved by the guard.
            self._queue.put_nowait(_END)
            if self._guard is not None and not self._guard.done():
                await asyncio.shield(self._guard)
            self._raise_failure()
            raise StopAsyncIteration
        self._taken.set()
        if self._cancelled:
            self._raise_failure()
            raise StopAsyncIteration
        return item  # type: ignore[return-value]

    async def __aenter__(self) -> "ItemStream[T]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.aclose()
        return False


class ErrorStream:
    """Single-shot stream carrying at most one terminal error.

    ``get`` resolves to the error, or to ``None`` when the run ended cleanly.
    Once a value has been received the stream is closed and ``get`` keeps
    returning ``None``.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[BaseException | None] = (
            asyncio.get_running_loop().create_future()
        )
        self._received = False

    @property
    def closed(self) -> bool:
        return self._received or (self._future.done() and self._future.result() is None)

    def send(self, error: BaseException) -> None:
        if self._future.done():
            raise RuntimeError("error stream already delivered a value")
        self._future.set_result(error)

    def close(self) -> None:
        if not self._future.done():
            self._future.set_result(None)

    async def get(self) -> BaseException | None:
        if self._received:
            return None
        value = await asyncio.shield(self._future)
        self._received = True
        return value

    def __aiter__(self) -> "ErrorStream":
        return self

    async def __anext__(self) -> BaseException:
        value = await self.get()
        if value is None:
            raise StopAsyncIteration
        return value


@dataclass(slots=True)
class StreamPair(Generic[T]):
    items: ItemStream[T]
    errors: ErrorStream
    task: asyncio.Task[None]

    def cancel(self) -> None:
        self.items.cancel()
        if not self.task.done():
            self.task.cancel()


__all__ = [
    "ItemStream",
    "ErrorStream",
    "StreamPair",
]
