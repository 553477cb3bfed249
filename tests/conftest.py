from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Iterable, Optional

import pytest
from werkzeug.security import generate_password_hash

from course_attendance.attendance.model import AttendanceRecord, CourseAttendanceRow, StudentAttendanceRow
from course_attendance.container import wire
from course_attendance.core.enums import AttendanceStatus, Role, UpsertOutcome
from course_attendance.core.exceptions import StorageFailure
from course_attendance.courses.model import Course, RosterStudent
from course_attendance.users.model import Student, User


class InMemoryUsers:
    def __init__(self, users: Iterable[User] = ()):
        self.by_id: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)


class InMemoryStudents:
    def __init__(self, students: Iterable[Student] = ()):
        self.by_id: dict[int, Student] = {s.student_id: s for s in students}

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.by_id.get(student_id)

    def existing_ids(self, student_ids) -> set[int]:
        return {int(i) for i in student_ids if int(i) in self.by_id}


class InMemoryCourses:
    def __init__(self, users: InMemoryUsers, students: InMemoryStudents):
        self._users = users
        self._students = students
        self.courses: dict[int, Course] = {}
        self.enrolled: dict[int, set[int]] = {}

    def add(self, course: Course, student_ids: Iterable[int] = ()) -> Course:
        self.courses[course.course_id] = course
        self.enrolled[course.course_id] = set(student_ids)
        return course

    def get_by_id(self, course_id: int) -> Optional[Course]:
        return self.courses.get(course_id)

    def list_roster(self, course_id: int):
        out = []
        for sid in sorted(self.enrolled.get(course_id, set())):
            s = self._students.get_by_id(sid)
            u = self._users.get_by_id(s.user_id)
            out.append(
                RosterStudent(
                    student_id=s.student_id,
                    user_id=s.user_id,
                    enrollment_number=s.enrollment_number,
                    full_name=u.full_name,
                    email=u.email,
                )
            )
        return out

    def enroll_student(self, *, course_id: int, student_id: int) -> bool:
        ids = self.enrolled.setdefault(course_id, set())
        if student_id in ids:
            return False
        ids.add(student_id)
        return True

    def remove_student(self, *, course_id: int, student_id: int) -> bool:
        ids = self.enrolled.get(course_id, set())
        if student_id not in ids:
            return False
        ids.discard(student_id)
        return True

    def delete_by_id(self, course_id: int) -> bool:
        self.enrolled.pop(course_id, None)
        return self.courses.pop(course_id, None) is not None


class InMemoryAttendance:
    """Keyed by (course_id, student_id, lecture_date), like the unique index."""

    def __init__(self, courses: InMemoryCourses, students: InMemoryStudents, users: InMemoryUsers):
        self._courses = courses
        self._students = students
        self._users = users
        self._lock = threading.Lock()
        self._rows: dict[tuple[int, int, date], AttendanceRecord] = {}
        self._next_id = 1
        self.fail_after: Optional[int] = None
        self.upsert_calls = 0

    def upsert(self, *, course_id, student_id, lecture_date, status) -> UpsertOutcome:
        with self._lock:
            if self.fail_after is not None and self.upsert_calls >= self.fail_after:
                raise StorageFailure("connection lost")
            self.upsert_calls += 1
            key = (course_id, student_id, lecture_date)
            now = datetime(2024, 1, 1, 12, 0, 0)
            existing = self._rows.get(key)
            if existing:
                self._rows[key] = AttendanceRecord(
                    attendance_id=existing.attendance_id,
                    course_id=course_id,
                    student_id=student_id,
                    lecture_date=lecture_date,
                    status=status,
                    created_at=existing.created_at,
                    updated_at=now,
                )
                return UpsertOutcome.UPDATED
            self._rows[key] = AttendanceRecord(
                attendance_id=self._next_id,
                course_id=course_id,
                student_id=student_id,
                lecture_date=lecture_date,
                status=status,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            return UpsertOutcome.INSERTED

    def all(self) -> list[AttendanceRecord]:
        return list(self._rows.values())

    def find_by_student(self, student_id: int):
        for r in sorted(self._rows.values(), key=lambda r: r.lecture_date, reverse=True):
            if r.student_id == student_id:
                c = self._courses.get_by_id(r.course_id)
                yield StudentAttendanceRow(record=r, course_title=c.title, course_code=c.code)

    def find_by_course(self, course_id: int):
        for r in sorted(self._rows.values(), key=lambda r: r.lecture_date, reverse=True):
            if r.course_id == course_id:
                s = self._students.get_by_id(r.student_id)
                u = self._users.get_by_id(s.user_id)
                c = self._courses.get_by_id(course_id)
                yield CourseAttendanceRow(
                    record=r,
                    enrollment_number=s.enrollment_number,
                    student_name=u.full_name,
                    course_title=c.title,
                )

    def _in_range(self, course_id, start_date, end_date):
        for r in self._rows.values():
            if r.course_id != course_id:
                continue
            if start_date is not None and r.lecture_date < start_date:
                continue
            if end_date is not None and r.lecture_date > end_date:
                continue
            yield r

    def find_in_range(self, *, course_id, start_date=None, end_date=None):
        return sorted(self._in_range(course_id, start_date, end_date), key=lambda r: (r.student_id, r.lecture_date))

    def distinct_dates(self, *, course_id, start_date=None, end_date=None) -> set[date]:
        return {r.lecture_date for r in self._in_range(course_id, start_date, end_date)}

    def count_by_status(self, *, course_id, student_id, status) -> int:
        return sum(
            1
            for r in self._rows.values()
            if r.course_id == course_id and r.student_id == student_id and r.status == status
        )

    def delete_all_for_course(self, course_id: int) -> int:
        keys = [k for k in self._rows if k[0] == course_id]
        for k in keys:
            del self._rows[k]
        return len(keys)


ADMIN_ID, TEACHER_ID, OTHER_TEACHER_ID = 1, 2, 3
S1, S2, S3 = 11, 12, 13
COURSE_ID = 100


@pytest.fixture()
def users():
    hashed = generate_password_hash("secret123")
    people = [
        User(user_id=ADMIN_ID, full_name="Ada Admin", email="admin@example.edu", password_hash=hashed, role=Role.ADMIN),
        User(user_id=TEACHER_ID, full_name="Tom Teacher", email="tom@example.edu", password_hash=hashed, role=Role.TEACHER),
        User(
            user_id=OTHER_TEACHER_ID,
            full_name="Tina Teacher",
            email="tina@example.edu",
            password_hash=hashed,
            role=Role.TEACHER,
        ),
        User(user_id=21, full_name="Sam One", email="s1@example.edu", password_hash=hashed, role=Role.STUDENT),
        User(user_id=22, full_name="Sue Two", email="s2@example.edu", password_hash=hashed, role=Role.STUDENT),
        User(user_id=23, full_name="Syd Three", email="s3@example.edu", password_hash=hashed, role=Role.STUDENT),
        User(
            user_id=24,
            full_name="Gone User",
            email="gone@example.edu",
            password_hash=hashed,
            role=Role.TEACHER,
            is_active=False,
        ),
    ]
    return InMemoryUsers(people)


@pytest.fixture()
def students():
    return InMemoryStudents(
        [
            Student(student_id=S1, user_id=21, enrollment_number="ENR-001"),
            Student(student_id=S2, user_id=22, enrollment_number="ENR-002"),
            Student(student_id=S3, user_id=23, enrollment_number="ENR-003"),
        ]
    )


@pytest.fixture()
def courses(users, students):
    repo = InMemoryCourses(users, students)
    repo.add(Course(course_id=COURSE_ID, title="Databases", code="CS101", teacher_id=TEACHER_ID), [S1, S2, S3])
    return repo


@pytest.fixture()
def store(courses, students, users):
    return InMemoryAttendance(courses, students, users)


@pytest.fixture()
def container(users, students, courses, store):
    return wire(users_repo=users, students_repo=students, courses_repo=courses, attendance_repo=store)


@pytest.fixture()
def seed(store):
    """Apply marks directly to the store: seed([(student, "2024-01-01", "present"), ...])."""

    def _seed(rows, course_id=COURSE_ID):
        for student_id, day, status in rows:
            store.upsert(
                course_id=course_id,
                student_id=student_id,
                lecture_date=date.fromisoformat(day),
                status=AttendanceStatus(status),
            )

    return _seed
