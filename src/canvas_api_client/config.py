"""Client configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

DEFAULT_HOST = "canvas.instructure.com"


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class PaginationConfig:
    """Pagination and streaming settings."""

    per_page: int = 10
    item_buffer_size: int = 1
    max_pages: int = 10_000

    def validate(self) -> None:
        if self.per_page < 1:
            raise ValueError("pagination.per_page must be >= 1")
        if self.item_buffer_size < 1:
            raise ValueError("pagination.item_buffer_size must be >= 1")
        if self.max_pages < 1:
            raise ValueError("pagination.max_pages must be >= 1")


@dataclass(slots=True, frozen=True)
class CanvasClientConfig:
    """Runtime configuration for Canvas client."""

    base_url: str = f"https://{DEFAULT_HOST}/api/v1"
    token: str | None = field(default=None, repr=False)
    user_agent: str = "canvas-api-client/0.1.0"

    transport: TransportConfig = field(default_factory=TransportConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CanvasClientConfig":
        """Build a config from ``CANVAS_TOKEN`` and ``CANVAS_HOST``."""

        env = os.environ if environ is None else environ
        host = env.get("CANVAS_HOST") or DEFAULT_HOST
        return cls(
            base_url=f"https://{host}/api/v1",
            token=env.get("CANVAS_TOKEN") or None,
        )

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.token is not None and not isinstance(self.token, str):
            raise ValueError("token must be str")
        self.transport.validate()
        self.pagination.validate()


__all__ = [
    "DEFAULT_HOST",
    "TransportConfig",
    "PaginationConfig",
    "CanvasClientConfig",
]
