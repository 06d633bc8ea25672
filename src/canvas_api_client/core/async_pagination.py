"""Async paginator following ``Link: rel="next"`` cursors."""

from __future__ import annotations

import asyncio
import logging
from typing import Generic, TypeVar

import httpx

from .async_transport import AsyncDoer
from .errors import CanvasProtocolError, CanvasTransportError
from .pagination import PageRequest, check_next_url, next_page_url
from .response_parsing import PageDecoder
from .streams import ErrorStream, ItemStream, StreamPair
from .transport_shared import QueryParams

T = TypeVar("T")

logger = logging.getLogger("canvas_api_client")


class Paginator(Generic[T]):
    """Streams the items of a paginated collection endpoint.

    Each :meth:`start` runs one fetch loop in its own task: fetch a page,
    push its decoded items, follow the next-page cursor until there is none.
    The first failure of any kind is sent on the error stream and ends the
    run. Only one page is in flight at a time.
    """

    def __init__(
        self,
        doer: AsyncDoer,
        url: str,
        decode: PageDecoder[T],
        *,
        params: QueryParams = (),
        capacity: int = 1,
        max_pages: int = 10_000,
    ) -> None:
        self._doer = doer
        self._first = PageRequest(url=url, params=tuple(params))
        self._decode = decode
        self._capacity = capacity
        self._max_pages = max_pages

    @property
    def first_request(self) -> PageRequest:
        return self._first

    def start(self) -> StreamPair[T]:
        items: ItemStream[T] = ItemStream(self._capacity)
        errors = ErrorStream()
        task = asyncio.create_task(self._run(items, errors))
        items.bind_producer(task)
        return StreamPair(items=items, errors=errors, task=task)

    async def _run(self, items: ItemStream[T], errors: ErrorStream) -> None:
        request: PageRequest | None = self._first
        seen_urls: set[str] = {self._first.url}
        pages = 0
        pushed = 0
        try:
            while request is not None:
                if pages >= self._max_pages:
                    raise CanvasProtocolError("Exceeded pagination guardrail (max_pages)")
                pages += 1
                logger.debug("page fetch start url=%s page=%s", request.url, pages)
                response = await self._fetch(request)
                try:
                    body = await response.aread()
                    for item in self._decode(body):
                        if not await items.put(item):
                            logger.debug("stream cancelled by consumer page=%s", pages)
                            return
                        pushed += 1
                    next_url = next_page_url(response)
                finally:
                    await response.aclose()

                if next_url is None:
                    request = None
                else:
                    check_next_url(next_url, seen_urls=seen_urls)
                    request = PageRequest(url=next_url)
            logger.info("pagination completed url=%s pages=%s items=%s", self._first.url, pages, pushed)
        except asyncio.CancelledError:
            logger.debug("pagination cancelled url=%s pages=%s", self._first.url, pages)
            raise
        except Exception as exc:
            logger.warning(
                "pagination failed url=%s page=%s items=%s error=%s",
                self._first.url,
                pages,
                pushed,
                exc.__class__.__name__,
            )
            errors.send(exc)
        finally:
            errors.close()
            await items.close()

    async def _fetch(self, request: PageRequest) -> httpx.Response:
        try:
            return await self._doer.request("GET", request.url, params=request.params or None)
        except httpx.HTTPError as exc:
            raise CanvasTransportError("network/transport error", cause="network") from exc


__all__ = [
    "Paginator",
]
