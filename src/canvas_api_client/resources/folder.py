"""Folder resource with its paginated children."""

from __future__ import annotations

from ..config import PaginationConfig
from ..core.async_transport import AsyncTransport
from ..core.error_bridge import ErrorHandler, fatal_error_handler
from ..core.streams import ItemStream
from ..core.transport_shared import QueryOptions
from .collection import PaginatedCollection
from .models import File, Folder
from .parser import decode_files, decode_folders


class FolderService(PaginatedCollection):
    """A folder bound to the transport it was fetched with."""

    def __init__(
        self,
        transport: AsyncTransport,
        pagination: PaginationConfig,
        folder: Folder,
        *,
        error_handler: ErrorHandler = fatal_error_handler,
    ) -> None:
        super().__init__(transport, pagination, error_handler=error_handler)
        self.folder = folder

    @property
    def id(self) -> int:
        return self.folder.id

    def files(self, options: QueryOptions | None = None) -> ItemStream[File]:
        return self._stream(f"/folders/{self.id}/files", decode_files, options)

    async def list_files(self, options: QueryOptions | None = None) -> tuple[File, ...]:
        return await self._list(
            f"/folders/{self.id}/files",
            decode_files,
            options,
            context="folder_files",
        )

    def folders(self, options: QueryOptions | None = None) -> ItemStream[Folder]:
        return self._stream(f"/folders/{self.id}/folders", decode_folders, options)

    async def list_folders(self, options: QueryOptions | None = None) -> tuple[Folder, ...]:
        return await self._list(
            f"/folders/{self.id}/folders",
            decode_folders,
            options,
            context="folder_folders",
        )


__all__ = [
    "FolderService",
]
