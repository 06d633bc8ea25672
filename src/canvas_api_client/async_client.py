"""Public async client entrypoint."""

from __future__ import annotations

from collections.abc import AsyncIterator
from types import TracebackType
from typing import TypeVar

from .client_shared import validate_client_config
from .config import CanvasClientConfig
from .core.async_transport import AsyncTransport
from .core.error_bridge import ErrorHandler
from .core.errors import CanvasClientClosedError
from .core.streams import ItemStream
from .core.transport_shared import QueryOptions
from .resources.canvas import CanvasService
from .resources.course import CourseService
from .resources.models import User

T = TypeVar("T")


class AsyncCanvasClient:
    """Public async Canvas API client."""

    def __init__(
        self,
        *,
        config: CanvasClientConfig | None = None,
        transport: AsyncTransport | None = None,
        canvas_service: CanvasService | None = None,
    ) -> None:
        self._config = config or CanvasClientConfig()
        validate_client_config(self._config)

        self._transport = transport or AsyncTransport(self._config)
        self._canvas = canvas_service or CanvasService(
            self._transport,
            self._config.pagination,
        )
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise CanvasClientClosedError("AsyncCanvasClient is already closed")

    def set_error_handler(self, handler: ErrorHandler) -> None:
        """Handler for client-level streams and for courses fetched afterwards."""

        self._canvas.set_error_handler(handler)

    def courses(self, options: QueryOptions | None = None) -> AsyncIterator[CourseService]:
        self._ensure_open()
        return self._guarded(self._canvas.courses(options))

    async def list_courses(self, options: QueryOptions | None = None) -> tuple[CourseService, ...]:
        self._ensure_open()
        return await self._canvas.list_courses(options)

    async def get_course(self, course_id: int, options: QueryOptions | None = None) -> CourseService:
        self._ensure_open()
        return await self._canvas.get_course(course_id, options)

    async def current_user(self) -> User:
        self._ensure_open()
        return await self._canvas.current_user()

    async def get_user(self, user_id: int, options: QueryOptions | None = None) -> User:
        self._ensure_open()
        return await self._canvas.get_user(user_id, options)

    async def _guarded(self, stream: ItemStream[T]) -> AsyncIterator[T]:
        try:
            while True:
                self._ensure_open()
                try:
                    item = await anext(stream)
                except StopAsyncIteration:
                    return
                self._ensure_open()
                yield item
        finally:
            await stream.aclose()

    async def close(self) -> None:
        if self._closed:
            return
        await self._transport.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncCanvasClient":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncCanvasClient",
]
