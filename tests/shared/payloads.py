from __future__ import annotations

from collections.abc import Sequence

BASE_URL = "https://canvas.test/api/v1"


def make_link_header(next_url: str | None, *, current_url: str = f"{BASE_URL}/current") -> str:
    parts = [f'<{current_url}>; rel="current"']
    if next_url is not None:
        parts.append(f'<{next_url}>; rel="next"')
    parts.append(f'<{BASE_URL}/first>; rel="first"')
    return ",".join(parts)


def make_course_payload(course_id: int, *, name: str | None = None) -> dict[str, object]:
    return {
        "id": course_id,
        "name": name or f"Course {course_id}",
        "course_code": f"C{course_id}",
        "workflow_state": "available",
        "account_id": 1,
        "enrollment_term_id": 7,
        "start_at": "2024-01-08T08:00:00Z",
        "end_at": None,
        "time_zone": "America/Los_Angeles",
        "default_view": "modules",
        "term": {"id": 7, "name": "Spring", "start_at": None, "end_at": None},
    }


def make_assignment_payload(assignment_id: int, *, course_id: int = 1) -> dict[str, object]:
    return {
        "id": assignment_id,
        "name": f"Assignment {assignment_id}",
        "description": "<p>read</p>",
        "course_id": course_id,
        "due_at": "2024-02-01T07:59:59Z",
        "lock_at": None,
        "unlock_at": None,
        "points_possible": 10,
        "grading_type": "points",
        "submission_types": ["online_upload"],
        "published": True,
        "position": assignment_id,
        "html_url": f"https://canvas.test/courses/{course_id}/assignments/{assignment_id}",
    }


def make_file_payload(file_id: int, *, folder_id: int = 3) -> dict[str, object]:
    return {
        "id": file_id,
        "folder_id": folder_id,
        "display_name": f"file-{file_id}.pdf",
        "filename": f"file-{file_id}.pdf",
        "content-type": "application/pdf",
        "url": f"https://canvas.test/files/{file_id}/download",
        "size": 1024,
        "created_at": "2024-01-10T00:00:00Z",
        "updated_at": "2024-01-11T00:00:00Z",
        "locked": False,
        "hidden": False,
    }


def make_folder_payload(folder_id: int, *, parent_folder_id: int | None = None) -> dict[str, object]:
    return {
        "id": folder_id,
        "name": f"folder-{folder_id}",
        "full_name": f"course files/folder-{folder_id}",
        "context_type": "Course",
        "context_id": 1,
        "parent_folder_id": parent_folder_id,
        "files_count": 2,
        "folders_count": 0,
    }


def make_user_payload(user_id: int) -> dict[str, object]:
    return {
        "id": user_id,
        "name": f"User {user_id}",
        "sortable_name": f"{user_id}, User",
        "short_name": f"U{user_id}",
        "login_id": f"user{user_id}",
        "email": f"user{user_id}@example.edu",
        "avatar_url": None,
    }


def make_unauthenticated_payload() -> dict[str, object]:
    return {
        "status": "unauthenticated",
        "errors": [{"message": "user authorization required"}],
    }


def make_ids(items: Sequence[object]) -> list[int]:
    return [item.id for item in items]  # type: ignore[attr-defined]
