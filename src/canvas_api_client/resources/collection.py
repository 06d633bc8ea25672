"""Base for resource objects exposing paginated collections."""

from __future__ import annotations

from typing import TypeVar

from ..config import PaginationConfig
from ..core.async_pagination import Paginator
from ..core.async_transport import AsyncTransport
from ..core.collector import collect, raise_for_collected
from ..core.error_bridge import ErrorHandler, bridge_errors, fatal_error_handler
from ..core.response_parsing import JsonObject, PageDecoder
from ..core.streams import ItemStream, StreamPair
from ..core.transport_shared import FormData, QueryOptions, normalize_query

T = TypeVar("T")


class PaginatedCollection:
    """Holds the transport, pagination settings and error-handling strategy.

    Each streaming call snapshots the current handler when it starts, so
    replacing the handler only affects later calls.
    """

    def __init__(
        self,
        transport: AsyncTransport,
        pagination: PaginationConfig,
        *,
        error_handler: ErrorHandler = fatal_error_handler,
    ) -> None:
        self._transport = transport
        self._pagination = pagination
        self._error_handler = error_handler

    @property
    def error_handler(self) -> ErrorHandler:
        return self._error_handler

    def set_error_handler(self, handler: ErrorHandler) -> None:
        """Replace the handler used by streaming calls.

        The handler receives the error and an ``asyncio.Event``; setting the
        event stops the stream. The default handler re-raises the error from
        the iteration.
        """

        self._error_handler = handler

    def _paginator(
        self,
        path: str,
        decode: PageDecoder[T],
        options: QueryOptions | None,
    ) -> Paginator[T]:
        params = normalize_query({"per_page": self._pagination.per_page, **(options or {})})
        return Paginator(
            self._transport,
            path,
            decode,
            params=params,
            capacity=self._pagination.item_buffer_size,
            max_pages=self._pagination.max_pages,
        )

    def _stream_pair(
        self,
        path: str,
        decode: PageDecoder[T],
        options: QueryOptions | None = None,
    ) -> StreamPair[T]:
        """Start a run without an error handler; the caller drains both streams."""

        return self._paginator(path, decode, options).start()

    def _stream(
        self,
        path: str,
        decode: PageDecoder[T],
        options: QueryOptions | None = None,
    ) -> ItemStream[T]:
        handler = self._error_handler
        pair = self._paginator(path, decode, options).start()
        bridge_errors(pair, handler)
        return pair.items

    async def _list(
        self,
        path: str,
        decode: PageDecoder[T],
        options: QueryOptions | None = None,
        *,
        context: str,
    ) -> tuple[T, ...]:
        collected = await collect(self._paginator(path, decode, options))
        return raise_for_collected(collected, context=context)

    async def _get_object(self, path: str, options: QueryOptions | None = None) -> JsonObject:
        return await self._transport.get_json(path, params=normalize_query(options))

    async def _get_objects(self, path: str, decode: PageDecoder[T]) -> tuple[T, ...]:
        """GET an unpaginated JSON array and decode every element."""

        body, _ = await self._transport.read("GET", path)
        return tuple(decode(body))

    async def _send_object(self, method: str, path: str, data: FormData | None = None) -> JsonObject:
        return await self._transport.send_json(method, path, data=data)


__all__ = [
    "PaginatedCollection",
]
