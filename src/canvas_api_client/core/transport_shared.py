"""Shared helpers for transport implementations."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import httpx

from ..config import CanvasClientConfig

QueryValue = str | int | float | bool | None
QueryOptions = Mapping[str, QueryValue | Sequence[QueryValue]]
QueryParams = tuple[tuple[str, str], ...]
FormData = dict[str, str | list[str]]


def build_default_headers(config: CanvasClientConfig) -> Mapping[str, str]:
    headers = {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return headers


def build_default_timeout(config: CanvasClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def _format_value(value: QueryValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_query(options: QueryOptions | None) -> QueryParams:
    """Flatten query options into ordered key/value pairs.

    Sequence values repeat their key once per element; ``None`` values are
    dropped.
    """

    if not options:
        return ()
    pairs: list[tuple[str, str]] = []
    for key, raw in options.items():
        if raw is None:
            continue
        if isinstance(raw, Sequence) and not isinstance(raw, str):
            pairs.extend((key, _format_value(value)) for value in raw if value is not None)
            continue
        pairs.append((key, _format_value(raw)))
    return tuple(pairs)


def normalize_form(fields: QueryOptions | None, *, prefix: str | None = None) -> FormData:
    """Encode fields as a Rails-style form body.

    With a ``prefix`` each key is nested as ``prefix[key]``. Sequence values
    are sent under ``key[]``.
    """

    form: FormData = {}
    for key, raw in (fields or {}).items():
        if raw is None:
            continue
        name = f"{prefix}[{key}]" if prefix else key
        if isinstance(raw, Sequence) and not isinstance(raw, str):
            form[f"{name}[]"] = [_format_value(value) for value in raw if value is not None]
            continue
        form[name] = _format_value(raw)
    return form


__all__ = [
    "QueryValue",
    "QueryOptions",
    "QueryParams",
    "FormData",
    "build_default_headers",
    "build_default_timeout",
    "normalize_query",
    "normalize_form",
]
