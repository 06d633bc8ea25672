"""Shared response body parsing helpers."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping
from typing import TypeVar

from .errors import (
    CanvasApiError,
    CanvasDecodeError,
    classify_api_error,
    parse_error_payload,
)

T = TypeVar("T")

JsonObject = dict[str, object]
PageDecoder = Callable[[bytes], Iterator[T]]


def parse_json_body(body: bytes, *, http_status: int | None) -> object:
    """Decode a response body, mapping parse failures to domain errors."""

    try:
        return json.loads(body)
    except ValueError as exc:
        raise CanvasDecodeError(
            "response body is not valid JSON",
            http_status=http_status,
        ) from exc


def error_from_body(body: bytes, *, http_status: int | None) -> CanvasApiError:
    """Build the typed error for a non-success response body."""

    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = None
    error = classify_api_error(parse_error_payload(payload), http_status=http_status)
    if error is None:
        return CanvasDecodeError("error body reported for a successful response", http_status=http_status)
    return error


def _embedded_error(payload: Mapping[str, object]) -> CanvasApiError | None:
    if "errors" not in payload:
        return None
    error_payload = parse_error_payload(payload)
    message = error_payload.render() if error_payload is not None else ""
    return CanvasApiError(
        message or "resource error embedded in page body",
        payload=error_payload,
        cause="resource",
    )


def iter_page_objects(body: bytes) -> Iterator[JsonObject]:
    """Yield the objects of a JSON array page body one at a time."""

    payload = parse_json_body(body, http_status=None)
    if isinstance(payload, dict):
        embedded = _embedded_error(payload)
        if embedded is not None:
            raise embedded
        raise CanvasDecodeError("page body JSON root must be an array")
    if not isinstance(payload, list):
        raise CanvasDecodeError("page body JSON root must be an array")
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise CanvasDecodeError(f"page element {index} must be an object")
        yield item


def page_decoder(parse_item: Callable[[JsonObject], T]) -> PageDecoder[T]:
    """Wrap a per-object parser into a lazy page decoder."""

    def _decode(body: bytes) -> Iterator[T]:
        for obj in iter_page_objects(body):
            yield parse_item(obj)

    return _decode


def parse_object_body(body: bytes, *, http_status: int | None = None) -> JsonObject:
    payload = parse_json_body(body, http_status=http_status)
    if not isinstance(payload, dict):
        raise CanvasDecodeError(
            "response JSON root must be an object",
            http_status=http_status,
        )
    return payload


__all__ = [
    "JsonObject",
    "PageDecoder",
    "parse_json_body",
    "error_from_body",
    "iter_page_objects",
    "page_decoder",
    "parse_object_body",
]
