from __future__ import annotations

import logging
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..core.exceptions import NotFoundError
from ..users.repository import StudentRepository
from .model import Course, RosterStudent
from .repository import CourseRepository

logger = logging.getLogger(__name__)


class CourseService:
    """Use case: course lookups, enrollment and deletion (with attendance cascade)."""

    def __init__(self, courses: CourseRepository, students: StudentRepository, attendance: AttendanceRepository):
        self._courses = courses
        self._students = students
        self._attendance = attendance

    def exists(self, course_id: int) -> bool:
        return self._courses.get_by_id(int(course_id)) is not None

    def get(self, course_id: int) -> Course:
        course = self._courses.get_by_id(int(course_id))
        if not course:
            raise NotFoundError(f"Course {course_id} not found")
        return course

    def roster(self, course_id: int) -> Sequence[RosterStudent]:
        self.get(course_id)
        return self._courses.list_roster(int(course_id))

    def enroll_student(self, *, course_id: int, student_id: int) -> bool:
        self.get(course_id)
        if not self._students.get_by_id(int(student_id)):
            raise NotFoundError(f"Student {student_id} not found")
        return self._courses.enroll_student(course_id=int(course_id), student_id=int(student_id))

    def remove_student(self, *, course_id: int, student_id: int) -> bool:
        self.get(course_id)
        return self._courses.remove_student(course_id=int(course_id), student_id=int(student_id))

    def delete_course(self, course_id: int) -> Course:
        course = self.get(course_id)
        removed = self._attendance.delete_all_for_course(course.course_id)
        self._courses.delete_by_id(course.course_id)
        logger.info("Deleted course %s (%s) with %s attendance records", course.course_id, course.code, removed)
        return course
