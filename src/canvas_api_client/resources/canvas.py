"""Top-level Canvas resources: courses and users."""

from __future__ import annotations

from collections.abc import Iterator

from ..core.streams import ItemStream
from ..core.transport_shared import QueryOptions
from .collection import PaginatedCollection
from .course import CourseService
from .models import Course, User
from .parser import decode_courses, parse_course, parse_user


class CanvasService(PaginatedCollection):
    """Entry point resources of the authenticated user."""

    def bind_course(self, course: Course) -> CourseService:
        """Wrap a course record; it inherits the current error handler."""

        return CourseService(
            self._transport,
            self._pagination,
            course,
            error_handler=self._error_handler,
        )

    def _decode_bound_courses(self, body: bytes) -> Iterator[CourseService]:
        for course in decode_courses(body):
            yield self.bind_course(course)

    def courses(self, options: QueryOptions | None = None) -> ItemStream[CourseService]:
        return self._stream("/courses", self._decode_bound_courses, options)

    async def list_courses(self, options: QueryOptions | None = None) -> tuple[CourseService, ...]:
        return await self._list("/courses", self._decode_bound_courses, options, context="courses")

    async def get_course(self, course_id: int, options: QueryOptions | None = None) -> CourseService:
        payload = await self._get_object(f"/courses/{course_id}", options)
        return self.bind_course(parse_course(payload))

    async def current_user(self) -> User:
        return parse_user(await self._get_object("/users/self"))

    async def get_user(self, user_id: int, options: QueryOptions | None = None) -> User:
        return parse_user(await self._get_object(f"/users/{user_id}", options))


__all__ = [
    "CanvasService",
]
