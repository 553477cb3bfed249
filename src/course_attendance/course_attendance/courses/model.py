from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Course:
    """Domain entity: Course. Attendance reports are always scoped to one course."""

    course_id: int
    title: str
    code: str
    teacher_id: Optional[int] = None


@dataclass(frozen=True)
class RosterStudent:
    """An enrolled student joined with the owning user's name and email."""

    student_id: int
    user_id: int
    enrollment_number: str
    full_name: str
    email: str

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "enrollmentNumber": self.enrollment_number,
            "name": self.full_name,
            "email": self.email,
        }
