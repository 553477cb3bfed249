from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Course, RosterStudent


class CourseRepository(Protocol):
    def get_by_id(self, course_id: int) -> Optional[Course]:
        raise NotImplementedError

    def list_roster(self, course_id: int) -> Sequence[RosterStudent]:
        raise NotImplementedError

    def enroll_student(self, *, course_id: int, student_id: int) -> bool:
        """Returns False if the student was already enrolled."""

        raise NotImplementedError

    def remove_student(self, *, course_id: int, student_id: int) -> bool:
        raise NotImplementedError

    def delete_by_id(self, course_id: int) -> bool:
        """Removes enrollments and the course row (attendance is cleared beforehand)."""

        raise NotImplementedError
