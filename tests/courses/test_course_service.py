from __future__ import annotations

import pytest

from course_attendance.core.exceptions import NotFoundError
from course_attendance.courses.model import Course

COURSE = 100


def test_delete_course_cascades_to_attendance(container, courses, store, seed):
    seed([(11, "2024-01-01", "present"), (12, "2024-01-01", "absent")])
    courses.add(Course(course_id=200, title="Networks", code="CS200", teacher_id=2), [11])
    seed([(11, "2024-01-05", "present")], course_id=200)

    deleted = container.course_service.delete_course(COURSE)

    assert deleted.code == "CS101"
    assert not container.course_service.exists(COURSE)
    assert [r.course_id for r in store.all()] == [200]


def test_delete_unknown_course(container):
    with pytest.raises(NotFoundError):
        container.course_service.delete_course(5)


def test_enroll_is_idempotent(container, courses):
    courses.enrolled[COURSE].discard(13)

    assert container.course_service.enroll_student(course_id=COURSE, student_id=13) is True
    assert container.course_service.enroll_student(course_id=COURSE, student_id=13) is False
    assert 13 in courses.enrolled[COURSE]


def test_enroll_unknown_student(container):
    with pytest.raises(NotFoundError):
        container.course_service.enroll_student(course_id=COURSE, student_id=999)


def test_removed_student_leaves_roster_but_keeps_history(container, seed):
    seed([(13, "2024-01-01", "present")])

    container.course_service.remove_student(course_id=COURSE, student_id=13)

    assert [s.student_id for s in container.course_service.roster(COURSE)] == [11, 12]
    assert len(list(container.attendance_service.student_history(13))) == 1
