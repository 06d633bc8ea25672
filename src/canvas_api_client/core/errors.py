"""Error types, error payload shapes and status mapping."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass


def _to_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _message_of(entry: object) -> str | None:
    if isinstance(entry, Mapping):
        return _to_text(entry.get("message"))
    return _to_text(entry)


@dataclass(slots=True, frozen=True)
class MessageListPayload:
    """``{"status": "...", "errors": [{"message": "..."}]}``"""

    status: str | None
    messages: tuple[str, ...]

    def render(self) -> str:
        joined = ", ".join(self.messages)
        if self.status and joined:
            return f"{self.status}: {joined}"
        if self.status and not self.messages:
            return self.status
        return joined


@dataclass(slots=True, frozen=True)
class FieldErrorsPayload:
    """``{"errors": {"field": "message"}, "message": "..."}``"""

    message: str | None
    fields: tuple[tuple[str, str], ...]

    @property
    def messages(self) -> tuple[str, ...]:
        if self.message:
            return (self.message,)
        return tuple(f"{name}: {text}" for name, text in self.fields)

    def render(self) -> str:
        return ", ".join(self.messages)


@dataclass(slots=True, frozen=True)
class StatusPayload:
    """``{"status": "...", "message": "..."}``"""

    status: str | None
    message: str | None

    @property
    def messages(self) -> tuple[str, ...]:
        return (self.message,) if self.message else ()

    def render(self) -> str:
        if self.status and self.message:
            return f"{self.status}: {self.message}"
        return self.status or self.message or ""


ErrorPayload = MessageListPayload | FieldErrorsPayload | StatusPayload


def _field_text(value: object) -> str:
    if isinstance(value, Sequence) and not isinstance(value, str):
        parts = [text for text in (_message_of(entry) for entry in value) if text]
        return ", ".join(parts)
    return _message_of(value) or ""


def parse_error_payload(payload: object) -> ErrorPayload | None:
    """Classify a decoded error body into one of the known wire shapes."""

    if not isinstance(payload, Mapping):
        return None
    status = _to_text(payload.get("status"))
    message = _to_text(payload.get("message"))
    errors = payload.get("errors")

    if isinstance(errors, Mapping):
        fields = tuple((str(name), _field_text(value)) for name, value in errors.items())
        return FieldErrorsPayload(message=message, fields=fields)
    if isinstance(errors, Sequence) and not isinstance(errors, str):
        messages = tuple(text for text in (_message_of(entry) for entry in errors) if text)
        return MessageListPayload(status=status, messages=messages)
    if status is not None or message is not None:
        return StatusPayload(status=status, message=message)
    return None


class CanvasApiError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        payload: ErrorPayload | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.payload = payload
        self.cause = cause

    @property
    def messages(self) -> tuple[str, ...]:
        if self.payload is None:
            return ()
        return self.payload.messages


class CanvasTransportError(CanvasApiError):
    """Network/transport-level failure."""


class CanvasClientClosedError(CanvasApiError):
    """Raised when client is used after close."""


class CanvasValidationError(CanvasApiError):
    """Invalid input / request rejected."""


class CanvasAuthError(CanvasValidationError):
    """Missing, invalid or insufficient credentials."""


class CanvasNotFoundError(CanvasValidationError):
    """Requested resource does not exist."""


class CanvasServerError(CanvasApiError):
    """Server-side unexpected error."""


class CanvasProtocolError(CanvasApiError):
    """Response shape or pagination inconsistency."""


class CanvasDecodeError(CanvasProtocolError):
    """Page body could not be decoded into items."""


class CanvasPartialResultError(CanvasApiError):
    """Raised when a collection fails after collecting partial data."""

    def __init__(
        self,
        message: str,
        *,
        partial_result: tuple[object, ...],
        cause: str | None = None,
        http_status: int | None = None,
        payload: ErrorPayload | None = None,
    ) -> None:
        super().__init__(
            message,
            http_status=http_status,
            payload=payload,
            cause=cause,
        )
        if not isinstance(partial_result, tuple):
            raise TypeError("partial_result must be a tuple")
        self.partial_result = partial_result


def classify_api_error(
    payload: ErrorPayload | None,
    *,
    http_status: int | None,
) -> CanvasApiError | None:
    """Map HTTP status and error body to domain exceptions."""

    if http_status is not None and 200 <= http_status < 300:
        return None

    message = payload.render() if payload is not None else ""
    if not message:
        message = f"Canvas API request failed (HTTP {http_status})"

    if http_status is None:
        return CanvasProtocolError("Missing HTTP status", payload=payload)
    if http_status in (401, 403):
        return CanvasAuthError(message, http_status=http_status, payload=payload)
    if http_status == 404:
        return CanvasNotFoundError(message, http_status=http_status, payload=payload)
    if http_status >= 500:
        return CanvasServerError(
            message,
            http_status=http_status,
            payload=payload,
            cause="server",
        )
    if http_status >= 400:
        return CanvasValidationError(message, http_status=http_status, payload=payload)
    return CanvasProtocolError(
        f"Unexpected HTTP status {http_status}",
        http_status=http_status,
        payload=payload,
    )


__all__ = [
    "MessageListPayload",
    "FieldErrorsPayload",
    "StatusPayload",
    "ErrorPayload",
    "parse_error_payload",
    "CanvasApiError",
    "CanvasTransportError",
    "CanvasClientClosedError",
    "CanvasValidationError",
    "CanvasAuthError",
    "CanvasNotFoundError",
    "CanvasServerError",
    "CanvasProtocolError",
    "CanvasDecodeError",
    "CanvasPartialResultError",
    "classify_api_error",
]
