"""Canvas resource records."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Term:
    id: int | None
    name: str | None
    start_at: str | None
    end_at: str | None


@dataclass(slots=True, frozen=True)
class Course:
    id: int
    name: str | None
    course_code: str | None
    workflow_state: str | None
    account_id: int | None
    enrollment_term_id: int | None
    start_at: str | None
    end_at: str | None
    time_zone: str | None
    default_view: str | None
    total_students: int | None
    term: Term | None = None

    @property
    def context_code(self) -> str:
        return f"course_{self.id}"


@dataclass(slots=True, frozen=True)
class CourseSettings:
    allow_student_discussion_topics: bool
    allow_student_forum_attachments: bool
    allow_student_discussion_editing: bool
    grading_standard_enabled: bool
    grading_standard_id: int | None
    allow_student_organized_groups: bool
    hide_final_grades: bool
    hide_distribution_graphs: bool
    lock_all_announcements: bool
    usage_rights_required: bool


@dataclass(slots=True, frozen=True)
class Assignment:
    id: int
    name: str | None
    description: str | None
    course_id: int | None
    due_at: str | None
    lock_at: str | None
    unlock_at: str | None
    points_possible: float | None
    grading_type: str | None
    submission_types: tuple[str, ...] | list[str] = ()
    published: bool = False
    position: int | None = None
    html_url: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.submission_types, tuple):
            return
        object.__setattr__(self, "submission_types", tuple(self.submission_types))


@dataclass(slots=True, frozen=True)
class File:
    id: int
    folder_id: int | None
    display_name: str | None
    filename: str | None
    content_type: str | None
    url: str | None
    size: int | None
    created_at: str | None
    updated_at: str | None
    locked: bool = False
    hidden: bool = False


@dataclass(slots=True, frozen=True)
class Folder:
    id: int
    name: str | None
    full_name: str | None
    context_type: str | None
    context_id: int | None
    parent_folder_id: int | None
    files_count: int | None
    folders_count: int | None
    locked: bool = False
    hidden: bool = False


@dataclass(slots=True, frozen=True)
class User:
    id: int
    name: str | None
    sortable_name: str | None
    short_name: str | None
    login_id: str | None
    email: str | None
    avatar_url: str | None


@dataclass(slots=True, frozen=True)
class Quiz:
    id: int
    title: str | None
    quiz_type: str | None
    due_at: str | None
    points_possible: float | None
    question_count: int | None
    time_limit: int | None
    published: bool = False
    html_url: str | None = None


@dataclass(slots=True, frozen=True)
class DiscussionTopic:
    id: int
    title: str | None
    message: str | None
    posted_at: str | None
    published: bool = False
    html_url: str | None = None


@dataclass(slots=True, frozen=True)
class Permissions:
    """Permission flags of the current user on a course."""

    granted: frozenset[str]
    denied: frozenset[str]

    def allows(self, permission: str) -> bool:
        return permission in self.granted


__all__ = [
    "Term",
    "Course",
    "CourseSettings",
    "Assignment",
    "File",
    "Folder",
    "User",
    "Quiz",
    "DiscussionTopic",
    "Permissions",
]
