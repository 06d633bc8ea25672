"""Async HTTP transport with status evaluation."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from ..config import CanvasClientConfig
from .errors import CanvasTransportError
from .response_parsing import JsonObject, error_from_body, parse_json_body, parse_object_body
from .transport_shared import (
    FormData,
    QueryParams,
    build_default_headers,
    build_default_timeout,
)

logger = logging.getLogger("canvas_api_client")


class AsyncDoer(Protocol):
    """Request capability the pagination engine depends on."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: QueryParams | None = None,
        data: FormData | None = None,
    ) -> httpx.Response: ...


class AsyncTransport:
    """Asynchronous transport for Canvas API.

    ``request`` returns a response opened in streaming mode; the caller owns it
    and must close it. Non-2xx responses are read, closed and raised as typed
    errors. There is no retry.
    """

    def __init__(
        self,
        config: CanvasClientConfig,
        *,
        client: httpx.AsyncClient | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        normalized_base_url = config.base_url.rstrip("/") + "/"
        self._client = client or httpx.AsyncClient(
            base_url=normalized_base_url,
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
            transport=http_transport,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: QueryParams | None = None,
        data: FormData | None = None,
    ) -> httpx.Response:
        if self._closed:
            raise CanvasTransportError("transport is already closed")

        target = self._normalize_url(url)
        logger.debug("request start method=%s url=%s", method, target)
        request = self._client.build_request(
            method,
            target,
            params=list(params) if params else None,
            data=dict(data) if data else None,
        )
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            logger.error(
                "request network error method=%s url=%s error=%s",
                method,
                target,
                exc.__class__.__name__,
            )
            raise CanvasTransportError(
                "network/transport error",
                cause="network",
            ) from exc

        http_status = response.status_code
        logger.debug("response received url=%s http_status=%s", target, http_status)
        if response.is_success:
            return response

        try:
            body = await response.aread()
        except httpx.HTTPError as exc:
            raise CanvasTransportError(
                "network/transport error while reading error body",
                http_status=http_status,
                cause="network",
            ) from exc
        finally:
            await response.aclose()
        error = error_from_body(body, http_status=http_status)
        logger.error(
            "request failed method=%s url=%s http_status=%s error=%s",
            method,
            target,
            http_status,
            error,
        )
        raise error

    async def read(
        self,
        method: str,
        url: str,
        *,
        params: QueryParams | None = None,
        data: FormData | None = None,
    ) -> tuple[bytes, int]:
        """Perform a request and return its whole body with the status code."""

        response = await self.request(method, url, params=params, data=data)
        try:
            body = await response.aread()
        except httpx.HTTPError as exc:
            raise CanvasTransportError(
                "network/transport error while reading body",
                http_status=response.status_code,
                cause="network",
            ) from exc
        finally:
            await response.aclose()
        return body, response.status_code

    async def get_json(self, url: str, *, params: QueryParams | None = None) -> JsonObject:
        """GET a single JSON object."""

        body, http_status = await self.read("GET", url, params=params)
        return parse_object_body(body, http_status=http_status)

    async def send_json(
        self,
        method: str,
        url: str,
        *,
        data: FormData | None = None,
    ) -> JsonObject:
        """Send a form-encoded write and decode the JSON object it returns."""

        logger.info("write request method=%s url=%s fields=%s", method, url, len(data or {}))
        body, http_status = await self.read(method, url, data=data)
        return parse_object_body(body, http_status=http_status)

    async def get_any_json(self, url: str, *, params: QueryParams | None = None) -> object:
        """GET a JSON document of any shape."""

        body, http_status = await self.read("GET", url, params=params)
        return parse_json_body(body, http_status=http_status)

    @staticmethod
    def _normalize_url(url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return url.lstrip("/")


__all__ = [
    "AsyncDoer",
    "AsyncTransport",
]
