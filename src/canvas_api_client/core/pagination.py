"""Pagination helpers based on the ``Link`` response header."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from .errors import CanvasProtocolError
from .transport_shared import QueryParams


@dataclass(slots=True, frozen=True)
class PageRequest:
    url: str
    params: QueryParams = ()


def next_page_url(response: httpx.Response) -> str | None:
    """The ``rel="next"`` target of the ``Link`` header, if any."""

    url = response.links.get("next", {}).get("url")
    return url or None


def check_next_url(next_url: str, *, seen_urls: set[str]) -> None:
    if next_url in seen_urls:
        raise CanvasProtocolError("pagination loop detected")
    seen_urls.add(next_url)


__all__ = [
    "PageRequest",
    "next_page_url",
    "check_next_url",
]
