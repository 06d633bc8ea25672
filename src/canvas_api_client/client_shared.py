"""Shared helpers for client bootstrap."""

from __future__ import annotations

from .config import CanvasClientConfig
from .core.errors import CanvasValidationError


def validate_client_config(config: CanvasClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise CanvasValidationError(str(exc)) from exc


__all__ = [
    "validate_client_config",
]
