"""Collect a paginated stream into an ordered result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from .async_pagination import Paginator
from .errors import CanvasApiError, CanvasPartialResultError

T = TypeVar("T")

logger = logging.getLogger("canvas_api_client")


@dataclass(slots=True, frozen=True)
class Collected(Generic[T]):
    items: tuple[T, ...]
    error: Exception | None = None


async def collect(paginator: Paginator[T]) -> Collected[T]:
    """Drain one paginator run on the caller's task.

    The paginator sends its error before closing the item stream, so draining
    the items first and then reading the error stream keeps every item that
    was pushed before the failure.
    """

    pair = paginator.start()
    items: list[T] = []
    try:
        async for item in pair.items:
            items.append(item)
        error = await pair.errors.get()
    finally:
        pair.cancel()
    return Collected(items=tuple(items), error=error)


def raise_for_collected(collected: Collected[T], *, context: str) -> tuple[T, ...]:
    error = collected.error
    if error is None:
        return collected.items
    if collected.items:
        logger.warning(
            "%s partial failure partial_items=%s error=%s",
            context,
            len(collected.items),
            error.__class__.__name__,
        )
        raise CanvasPartialResultError(
            f"{context} retrieval failed after partial progress",
            partial_result=collected.items,
            cause=getattr(error, "cause", None),
            http_status=getattr(error, "http_status", None),
            payload=error.payload if isinstance(error, CanvasApiError) else None,
        ) from error
    logger.error("%s failure without partial error=%s", context, error.__class__.__name__)
    raise error


__all__ = [
    "Collected",
    "collect",
    "raise_for_collected",
]
