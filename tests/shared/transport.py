from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

import httpx

from canvas_api_client.config import CanvasClientConfig, PaginationConfig
from canvas_api_client.core.async_transport import AsyncTransport
from tests.shared.payloads import BASE_URL, make_link_header


def page(items: object, *, next_url: str | None = None, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        json=items,
        headers={"Link": make_link_header(next_url)},
    )


def raw_page(body: bytes, *, next_url: str | None = None) -> httpx.Response:
    return httpx.Response(200, content=body, headers={"Link": make_link_header(next_url)})


Step = httpx.Response | Exception


class SequencedDoer:
    """In-memory request capability replaying one step per request."""

    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)
        self.requests: list[tuple[str, str, tuple[tuple[str, str], ...] | None]] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def request(self, method: str, url: str, *, params=None, data=None) -> httpx.Response:
        self.requests.append((method, url, tuple(params) if params else None))
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


def build_config(*, per_page: int = 10, item_buffer_size: int = 1) -> CanvasClientConfig:
    cfg = CanvasClientConfig(
        base_url=BASE_URL,
        token="secret-token",
        pagination=PaginationConfig(per_page=per_page, item_buffer_size=item_buffer_size),
    )
    cfg.validate()
    return cfg


class RoutedHandler:
    """``httpx.MockTransport`` handler serving responses by path."""

    def __init__(self, routes: Mapping[str, Sequence[httpx.Response] | httpx.Response]):
        self._routes: dict[str, list[httpx.Response]] = {}
        for path, value in routes.items():
            self._routes[path] = list(value) if isinstance(value, Sequence) else [value]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get(request.url.path)
        if not queue:
            return httpx.Response(404, json={"errors": [{"message": "The specified resource does not exist."}]})
        return queue.pop(0)


def build_transport(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    config: CanvasClientConfig | None = None,
) -> AsyncTransport:
    return AsyncTransport(
        config or build_config(),
        http_transport=httpx.MockTransport(handler),
    )
