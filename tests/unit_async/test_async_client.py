from __future__ import annotations

import httpx
import pytest

from canvas_api_client.async_client import AsyncCanvasClient
from canvas_api_client.config import CanvasClientConfig, PaginationConfig
from canvas_api_client.core.error_bridge import cancel_on_error
from canvas_api_client.core.errors import CanvasClientClosedError, CanvasValidationError
from canvas_api_client.resources.course import CourseService
from tests.shared.payloads import (
    BASE_URL,
    make_course_payload,
    make_unauthenticated_payload,
    make_user_payload,
)
from tests.shared.transport import RoutedHandler, build_config, build_transport, page


def _client(handler: RoutedHandler) -> AsyncCanvasClient:
    config = build_config()
    return AsyncCanvasClient(config=config, transport=build_transport(handler, config=config))


def _two_course_pages() -> RoutedHandler:
    return RoutedHandler(
        {
            "/api/v1/courses": [
                page(
                    [make_course_payload(1), make_course_payload(2)],
                    next_url=f"{BASE_URL}/courses?page=2&per_page=10",
                ),
                page([make_course_payload(3)]),
            ]
        }
    )


def test_async_client_rejects_invalid_config():
    with pytest.raises(CanvasValidationError):
        AsyncCanvasClient(config=CanvasClientConfig(pagination=PaginationConfig(item_buffer_size=0)))


@pytest.mark.asyncio
async def test_async_client_context_manager_closes_transport():
    handler = RoutedHandler({})
    config = build_config()
    transport = build_transport(handler, config=config)
    async with AsyncCanvasClient(config=config, transport=transport) as client:
        assert client is not None
    assert transport.closed is True


@pytest.mark.asyncio
async def test_async_client_raises_when_used_after_close():
    client = _client(RoutedHandler({}))
    await client.close()
    await client.close()

    with pytest.raises(CanvasClientClosedError):
        await client.list_courses()
    with pytest.raises(CanvasClientClosedError):
        client.courses()
    with pytest.raises(CanvasClientClosedError):
        await client.current_user()


@pytest.mark.asyncio
async def test_async_client_streams_courses_across_pages():
    async with _client(_two_course_pages()) as client:
        courses = [course async for course in client.courses()]

    assert [course.id for course in courses] == [1, 2, 3]
    assert all(isinstance(course, CourseService) for course in courses)


@pytest.mark.asyncio
async def test_async_client_list_courses():
    async with _client(_two_course_pages()) as client:
        courses = await client.list_courses()

    assert [course.course.name for course in courses] == ["Course 1", "Course 2", "Course 3"]


@pytest.mark.asyncio
async def test_async_client_close_during_iteration_stops_stream():
    client = _client(_two_course_pages())
    stream = client.courses()
    first = await anext(stream)
    assert first.id == 1

    await client.close()
    with pytest.raises(CanvasClientClosedError):
        await anext(stream)


@pytest.mark.asyncio
async def test_async_client_error_handler_applies_to_course_streams():
    handler = RoutedHandler(
        {
            "/api/v1/courses/1": httpx.Response(200, json=make_course_payload(1)),
            "/api/v1/courses/1/users": httpx.Response(401, json=make_unauthenticated_payload()),
        }
    )
    async with _client(handler) as client:
        client.set_error_handler(cancel_on_error)
        course = await client.get_course(1)
        users = [user async for user in course.users()]

    assert course.id == 1
    assert users == []


@pytest.mark.asyncio
async def test_async_client_current_user_and_get_user():
    handler = RoutedHandler(
        {
            "/api/v1/users/self": httpx.Response(200, json=make_user_payload(1)),
            "/api/v1/users/2": httpx.Response(200, json=make_user_payload(2)),
        }
    )
    async with _client(handler) as client:
        me = await client.current_user()
        other = await client.get_user(2)

    assert me.id == 1
    assert other.login_id == "user2"
