from __future__ import annotations

import types
from datetime import date

import pytest

from course_attendance.core.exceptions import NotFoundError, ValidationError

COURSE = 100


def test_student_history_is_lazy_and_enriched_with_course(container, seed):
    seed([(11, "2024-01-01", "present"), (11, "2024-01-02", "absent"), (12, "2024-01-01", "present")])

    rows = container.attendance_service.student_history(11)

    assert isinstance(rows, types.GeneratorType)
    items = list(rows)
    assert [r.record.lecture_date for r in items] == [date(2024, 1, 2), date(2024, 1, 1)]
    assert items[0].to_dict()["course"] == {"course_id": COURSE, "title": "Databases", "code": "CS101"}


def test_student_history_can_be_queried_again(container, seed):
    seed([(11, "2024-01-01", "present")])

    first = container.attendance_service.student_history(11)
    assert len(list(first)) == 1
    assert list(first) == []
    assert len(list(container.attendance_service.student_history(11))) == 1


def test_course_history_is_enriched_with_student(container, seed):
    seed([(12, "2024-01-01", "absent")])

    (row,) = list(container.attendance_service.course_history(COURSE))

    assert row.to_dict()["student"] == {"student_id": 12, "enrollment_number": "ENR-002", "full_name": "Sue Two"}
    assert row.to_dict()["status"] == "absent"


def test_course_history_for_unknown_course(container):
    with pytest.raises(NotFoundError):
        container.attendance_service.course_history(5)


def test_student_history_rejects_non_integer_id(container):
    with pytest.raises(ValidationError):
        container.attendance_service.student_history("abc")
