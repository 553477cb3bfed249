from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access decisions."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Attendance mark stored per (course, student, lecture date)."""

    PRESENT = "present"
    ABSENT = "absent"


class UpsertOutcome(str, Enum):
    INSERTED = "inserted"
    UPDATED = "updated"


class Capability(str, Enum):
    """Capability tag required by each inbound operation."""

    MARK_ATTENDANCE = "mark_attendance"
    VIEW_REPORTS = "view_reports"
    LOOKUP = "lookup"
    MANAGE_COURSES = "manage_courses"
