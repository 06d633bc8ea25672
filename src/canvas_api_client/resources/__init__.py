"""Canvas resource package."""

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
