"""Course resource: settings, assignments, files, folders, users, quizzes and topics."""

from __future__ import annotations

import posixpath
from dataclasses import asdict

from ..config import PaginationConfig
from ..core.async_transport import AsyncTransport
from ..core.error_bridge import ErrorHandler, fatal_error_handler
from ..core.errors import CanvasValidationError
from ..core.streams import ItemStream, StreamPair
from ..core.transport_shared import QueryOptions, normalize_form
from .collection import PaginatedCollection
from .folder import FolderService
from .models import (
    Assignment,
    Course,
    CourseSettings,
    DiscussionTopic,
    File,
    Folder,
    Permissions,
    Quiz,
    User,
)
from .parser import (
    decode_assignments,
    decode_discussion_topics,
    decode_files,
    decode_folders,
    decode_quizzes,
    decode_users,
    parse_assignment,
    parse_course_settings,
    parse_file,
    parse_folder,
    parse_permissions,
    parse_quiz,
    parse_user,
)


class CourseService(PaginatedCollection):
    """A course bound to the transport it was fetched with.

    Streaming methods (``assignments``, ``files``, ...) return an
    :class:`ItemStream` and route a terminal error through the course's error
    handler. ``list_*`` methods return every item or raise; a failure after
    some items were received raises ``CanvasPartialResultError``.
    """

    def __init__(
        self,
        transport: AsyncTransport,
        pagination: PaginationConfig,
        course: Course,
        *,
        error_handler: ErrorHandler = fatal_error_handler,
    ) -> None:
        super().__init__(transport, pagination, error_handler=error_handler)
        self.course = course

    @property
    def id(self) -> int:
        return self.course.id

    @property
    def context_code(self) -> str:
        return self.course.context_code

    def _path(self, suffix: str) -> str:
        return f"/courses/{self.id}/{suffix}"

    def _bind_folder(self, folder: Folder) -> FolderService:
        return FolderService(
            self._transport,
            self._pagination,
            folder,
            error_handler=self._error_handler,
        )

    async def settings(self) -> CourseSettings:
        return parse_course_settings(await self._get_object(self._path("settings")))

    async def update_settings(self, settings: CourseSettings | QueryOptions) -> CourseSettings:
        """Write the given settings and return the stored result."""

        fields = asdict(settings) if isinstance(settings, CourseSettings) else settings
        payload = await self._send_object("PUT", self._path("settings"), normalize_form(fields))
        return parse_course_settings(payload)

    async def permissions(self) -> Permissions:
        return parse_permissions(await self._get_object(self._path("permissions")))

    async def activity(self) -> object:
        """Raw analytics activity document of the course."""

        return await self._transport.get_any_json(self._path("analytics/activity"))

    def assignments(self, options: QueryOptions | None = None) -> ItemStream[Assignment]:
        return self._stream(self._path("assignments"), decode_assignments, options)

    async def list_assignments(
        self,
        options: QueryOptions | None = None,
    ) -> tuple[Assignment, ...]:
        return await self._list(
            self._path("assignments"),
            decode_assignments,
            options,
            context="assignments",
        )

    async def assignment(self, assignment_id: int, options: QueryOptions | None = None) -> Assignment:
        payload = await self._get_object(self._path(f"assignments/{assignment_id}"), options)
        return parse_assignment(payload)

    async def create_assignment(self, fields: QueryOptions) -> Assignment:
        """Create an assignment from ``fields`` (sent as ``assignment[...]``)."""

        data = normalize_form(fields, prefix="assignment")
        return parse_assignment(await self._send_object("POST", self._path("assignments"), data))

    async def edit_assignment(self, assignment_id: int, fields: QueryOptions) -> Assignment:
        data = normalize_form(fields, prefix="assignment")
        path = self._path(f"assignments/{assignment_id}")
        return parse_assignment(await self._send_object("PUT", path, data))

    async def delete_assignment(self, assignment: Assignment | int) -> Assignment:
        """Delete an assignment; Canvas answers with the deleted record."""

        assignment_id = assignment.id if isinstance(assignment, Assignment) else assignment
        path = self._path(f"assignments/{assignment_id}")
        return parse_assignment(await self._send_object("DELETE", path))

    def files(self, options: QueryOptions | None = None) -> ItemStream[File]:
        return self._stream(self._path("files"), decode_files, options)

    def files_with_errors(self, options: QueryOptions | None = None) -> StreamPair[File]:
        """Stream files with direct access to the error stream.

        No error handler runs; drain ``pair.items`` and then await
        ``pair.errors.get()``.
        """

        return self._stream_pair(self._path("files"), decode_files, options)

    async def list_files(self, options: QueryOptions | None = None) -> tuple[File, ...]:
        return await self._list(self._path("files"), decode_files, options, context="files")

    async def file(self, file_id: int, options: QueryOptions | None = None) -> File:
        return parse_file(await self._get_object(self._path(f"files/{file_id}"), options))

    def folders(self, options: QueryOptions | None = None) -> ItemStream[Folder]:
        return self._stream(self._path("folders"), decode_folders, options)

    def folders_with_errors(self, options: QueryOptions | None = None) -> StreamPair[Folder]:
        return self._stream_pair(self._path("folders"), decode_folders, options)

    async def list_folders(self, options: QueryOptions | None = None) -> tuple[Folder, ...]:
        return await self._list(self._path("folders"), decode_folders, options, context="folders")

    async def folder_path(self, path: str) -> tuple[Folder, ...]:
        """Folders along ``path``, from the root folder down to the last segment."""

        target = posixpath.join(self._path("folders/by_path"), path.strip("/"))
        return await self._get_objects(target.rstrip("/"), decode_folders)

    async def create_folder(self, path: str, options: QueryOptions | None = None) -> FolderService:
        """Create the last segment of ``path`` inside its parent folder path."""

        parent, name = posixpath.split(path.strip("/"))
        if not name:
            raise CanvasValidationError("folder path must name a folder")
        fields = {**(options or {}), "name": name}
        if parent:
            fields["parent_folder_path"] = parent
        payload = await self._send_object("POST", self._path("folders"), normalize_form(fields))
        return self._bind_folder(parse_folder(payload))

    async def folder(self, folder_id: int, options: QueryOptions | None = None) -> FolderService:
        payload = await self._get_object(self._path(f"folders/{folder_id}"), options)
        return self._bind_folder(parse_folder(payload))

    async def root_folder(self, options: QueryOptions | None = None) -> FolderService:
        payload = await self._get_object(self._path("folders/root"), options)
        return self._bind_folder(parse_folder(payload))

    def users(self, options: QueryOptions | None = None) -> ItemStream[User]:
        return self._stream(self._path("users"), decode_users, options)

    async def list_users(self, options: QueryOptions | None = None) -> tuple[User, ...]:
        return await self._list(self._path("users"), decode_users, options, context="users")

    async def search_users(
        self,
        term: str,
        options: QueryOptions | None = None,
    ) -> tuple[User, ...]:
        merged = {**(options or {}), "search_term": term}
        return await self._list(
            self._path("search_users"),
            decode_users,
            merged,
            context="search_users",
        )

    async def user(self, user_id: int, options: QueryOptions | None = None) -> User:
        return parse_user(await self._get_object(self._path(f"users/{user_id}"), options))

    async def list_discussion_topics(
        self,
        options: QueryOptions | None = None,
    ) -> tuple[DiscussionTopic, ...]:
        return await self._list(
            self._path("discussion_topics"),
            decode_discussion_topics,
            options,
            context="discussion_topics",
        )

    def quizzes(self, options: QueryOptions | None = None) -> ItemStream[Quiz]:
        return self._stream(self._path("quizzes"), decode_quizzes, options)

    async def list_quizzes(self, options: QueryOptions | None = None) -> tuple[Quiz, ...]:
        return await self._list(self._path("quizzes"), decode_quizzes, options, context="quizzes")

    async def quiz(self, quiz_id: int, options: QueryOptions | None = None) -> Quiz:
        return parse_quiz(await self._get_object(self._path(f"quizzes/{quiz_id}"), options))


__all__ = [
    "CourseService",
]
