from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping, Sequence, Union

from ..common.datetime_utils import DateLike, normalize_lecture_date
from ..common.validators import require_int_id, require_status
from ..core.enums import UpsertOutcome
from ..core.exceptions import NotFoundError, StorageFailure, ValidationError
from ..courses.repository import CourseRepository
from ..users.repository import StudentRepository
from .model import CourseAttendanceRow, MarkEntry, MarkResult, StudentAttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

RawMarkEntry = Union[MarkEntry, Mapping[str, Any], Sequence[Any]]


class AttendanceService:
    """Bulk marking and attendance lookups.

    Each (student, status) pair is an independent upsert keyed by
    (course, student, lecture date). The batch as a whole is not a
    transaction; re-submitting the same batch converges to the same state.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        courses: CourseRepository,
        students: StudentRepository,
    ):
        self._attendance = attendance
        self._courses = courses
        self._students = students

    @staticmethod
    def _parse_entries(records: Iterable[RawMarkEntry]) -> list[MarkEntry]:
        if records is None or isinstance(records, (str, bytes, Mapping)):
            raise ValidationError("records must be a list of {studentId, status}")

        entries: list[MarkEntry] = []
        for idx, raw in enumerate(records):
            if isinstance(raw, MarkEntry):
                entries.append(raw)
                continue
            if isinstance(raw, Mapping):
                student = raw.get("studentId", raw.get("student_id"))
                status = raw.get("status")
            elif isinstance(raw, (list, tuple)) and len(raw) == 2:
                student, status = raw
            else:
                raise ValidationError(f"records[{idx}] must be {{studentId, status}}")
            entries.append(
                MarkEntry(
                    student_id=require_int_id(student, f"records[{idx}].studentId"),
                    status=require_status(status),
                )
            )

        if not entries:
            raise ValidationError("records must not be empty")
        return entries

    def mark_attendance(self, course_id: int, lecture_date: DateLike, records: Iterable[RawMarkEntry]) -> MarkResult:
        course_id = require_int_id(course_id, "courseId")
        day = normalize_lecture_date(lecture_date)
        entries = self._parse_entries(records)

        if not self._courses.get_by_id(course_id):
            raise NotFoundError(f"Course {course_id} not found")

        wanted = {e.student_id for e in entries}
        missing = wanted - self._students.existing_ids(wanted)
        if missing:
            raise NotFoundError(f"Student(s) not found: {', '.join(str(i) for i in sorted(missing))}")

        inserted = updated = 0
        for entry in entries:
            try:
                outcome = self._attendance.upsert(
                    course_id=course_id,
                    student_id=entry.student_id,
                    lecture_date=day,
                    status=entry.status,
                )
            except StorageFailure as exc:
                applied = inserted + updated
                logger.error(
                    "Marking course=%s date=%s stopped after %s/%s records: %s",
                    course_id,
                    day,
                    applied,
                    len(entries),
                    exc,
                )
                raise StorageFailure(
                    f"Attendance marking interrupted after {applied} of {len(entries)} records; "
                    "resubmitting the batch is safe",
                    attempted=applied + 1,
                    applied=applied,
                ) from exc

            if outcome == UpsertOutcome.INSERTED:
                inserted += 1
            else:
                updated += 1

        result = MarkResult(course_id=course_id, lecture_date=day, inserted=inserted, updated=updated)
        logger.info(
            "Marked attendance course=%s date=%s inserted=%s updated=%s",
            course_id,
            day,
            inserted,
            updated,
        )
        return result

    def student_history(self, student_id: int) -> Iterator[StudentAttendanceRow]:
        return self._attendance.find_by_student(require_int_id(student_id, "studentId"))

    def course_history(self, course_id: int) -> Iterator[CourseAttendanceRow]:
        course_id = require_int_id(course_id, "courseId")
        if not self._courses.get_by_id(course_id):
            raise NotFoundError(f"Course {course_id} not found")
        return self._attendance.find_by_course(course_id)

