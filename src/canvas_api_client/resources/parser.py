"""Parsers from Canvas JSON objects into typed records."""

from __future__ import annotations

from collections.abc import Mapping

from ..core.errors import CanvasDecodeError
from ..core.response_parsing import JsonObject, page_decoder
from .models import (
    Assignment,
    Course,
    CourseSettings,
    DiscussionTopic,
    File,
    Folder,
    Permissions,
    Quiz,
    Term,
    User,
)


def _required_id(payload: JsonObject, kind: str) -> int:
    value = payload.get("id")
    if isinstance(value, bool) or not isinstance(value, int):
        raise CanvasDecodeError(f"{kind} object must carry an integer id")
    return value


def _int(payload: JsonObject, key: str) -> int | None:
    value = payload.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def _float(payload: JsonObject, key: str) -> float | None:
    value = payload.get(key)
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        return float(value)
    return None


def _text(payload: JsonObject, key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    return str(value)


def _flag(payload: JsonObject, key: str) -> bool:
    return payload.get(key) is True


def parse_term(payload: object) -> Term | None:
    if not isinstance(payload, Mapping):
        return None
    return Term(
        id=_int(payload, "id"),
        name=_text(payload, "name"),
        start_at=_text(payload, "start_at"),
        end_at=_text(payload, "end_at"),
    )


def parse_course(payload: JsonObject) -> Course:
    return Course(
        id=_required_id(payload, "course"),
        name=_text(payload, "name"),
        course_code=_text(payload, "course_code"),
        workflow_state=_text(payload, "workflow_state"),
        account_id=_int(payload, "account_id"),
        enrollment_term_id=_int(payload, "enrollment_term_id"),
        start_at=_text(payload, "start_at"),
        end_at=_text(payload, "end_at"),
        time_zone=_text(payload, "time_zone"),
        default_view=_text(payload, "default_view"),
        total_students=_int(payload, "total_students"),
        term=parse_term(payload.get("term")),
    )


def parse_course_settings(payload: JsonObject) -> CourseSettings:
    return CourseSettings(
        allow_student_discussion_topics=_flag(payload, "allow_student_discussion_topics"),
        allow_student_forum_attachments=_flag(payload, "allow_student_forum_attachments"),
        allow_student_discussion_editing=_flag(payload, "allow_student_discussion_editing"),
        grading_standard_enabled=_flag(payload, "grading_standard_enabled"),
        grading_standard_id=_int(payload, "grading_standard_id"),
        allow_student_organized_groups=_flag(payload, "allow_student_organized_groups"),
        hide_final_grades=_flag(payload, "hide_final_grades"),
        hide_distribution_graphs=_flag(payload, "hide_distribution_graphs"),
        lock_all_announcements=_flag(payload, "lock_all_announcements"),
        usage_rights_required=_flag(payload, "usage_rights_required"),
    )


def parse_assignment(payload: JsonObject) -> Assignment:
    raw_types = payload.get("submission_types")
    submission_types = [str(entry) for entry in raw_types] if isinstance(raw_types, list) else []
    return Assignment(
        id=_required_id(payload, "assignment"),
        name=_text(payload, "name"),
        description=_text(payload, "description"),
        course_id=_int(payload, "course_id"),
        due_at=_text(payload, "due_at"),
        lock_at=_text(payload, "lock_at"),
        unlock_at=_text(payload, "unlock_at"),
        points_possible=_float(payload, "points_possible"),
        grading_type=_text(payload, "grading_type"),
        submission_types=submission_types,
        published=_flag(payload, "published"),
        position=_int(payload, "position"),
        html_url=_text(payload, "html_url"),
    )


def parse_file(payload: JsonObject) -> File:
    return File(
        id=_required_id(payload, "file"),
        folder_id=_int(payload, "folder_id"),
        display_name=_text(payload, "display_name"),
        filename=_text(payload, "filename"),
        content_type=_text(payload, "content-type"),
        url=_text(payload, "url"),
        size=_int(payload, "size"),
        created_at=_text(payload, "created_at"),
        updated_at=_text(payload, "updated_at"),
        locked=_flag(payload, "locked"),
        hidden=_flag(payload, "hidden"),
    )


def parse_folder(payload: JsonObject) -> Folder:
    return Folder(
        id=_required_id(payload, "folder"),
        name=_text(payload, "name"),
        full_name=_text(payload, "full_name"),
        context_type=_text(payload, "context_type"),
        context_id=_int(payload, "context_id"),
        parent_folder_id=_int(payload, "parent_folder_id"),
        files_count=_int(payload, "files_count"),
        folders_count=_int(payload, "folders_count"),
        locked=_flag(payload, "locked"),
        hidden=_flag(payload, "hidden"),
    )


def parse_user(payload: JsonObject) -> User:
    return User(
        id=_required_id(payload, "user"),
        name=_text(payload, "name"),
        sortable_name=_text(payload, "sortable_name"),
        short_name=_text(payload, "short_name"),
        login_id=_text(payload, "login_id"),
        email=_text(payload, "email"),
        avatar_url=_text(payload, "avatar_url"),
    )


def parse_quiz(payload: JsonObject) -> Quiz:
    return Quiz(
        id=_required_id(payload, "quiz"),
        title=_text(payload, "title"),
        quiz_type=_text(payload, "quiz_type"),
        due_at=_text(payload, "due_at"),
        points_possible=_float(payload, "points_possible"),
        question_count=_int(payload, "question_count"),
        time_limit=_int(payload, "time_limit"),
        published=_flag(payload, "published"),
        html_url=_text(payload, "html_url"),
    )


def parse_discussion_topic(payload: JsonObject) -> DiscussionTopic:
    return DiscussionTopic(
        id=_required_id(payload, "discussion topic"),
        title=_text(payload, "title"),
        message=_text(payload, "message"),
        posted_at=_text(payload, "posted_at"),
        published=_flag(payload, "published"),
        html_url=_text(payload, "html_url"),
    )


def parse_permissions(payload: JsonObject) -> Permissions:
    granted = frozenset(str(name) for name, value in payload.items() if value is True)
    denied = frozenset(str(name) for name, value in payload.items() if value is False)
    return Permissions(granted=granted, denied=denied)


decode_courses = page_decoder(parse_course)
decode_assignments = page_decoder(parse_assignment)
decode_files = page_decoder(parse_file)
decode_folders = page_decoder(parse_folder)
decode_users = page_decoder(parse_user)
decode_quizzes = page_decoder(parse_quiz)
decode_discussion_topics = page_decoder(parse_discussion_topic)


__all__ = [
    "parse_term",
    "parse_course",
    "parse_course_settings",
    "parse_assignment",
    "parse_file",
    "parse_folder",
    "parse_user",
    "parse_quiz",
    "parse_discussion_topic",
    "parse_permissions",
    "decode_courses",
    "decode_assignments",
    "decode_files",
    "decode_folders",
    "decode_users",
    "decode_quizzes",
    "decode_discussion_topics",
]
