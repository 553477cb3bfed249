from __future__ import annotations

from datetime import date
from typing import Iterator, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, UpsertOutcome
from .model import AttendanceRecord, CourseAttendanceRow, StudentAttendanceRow


class AttendanceRepository(Protocol):
    """Attendance record store.

    At most one record exists per (course_id, student_id, lecture_date);
    ``upsert`` resolves a conflicting write by replacing the status, never by
    raising.
    """

    def upsert(
        self,
        *,
        course_id: int,
        student_id: int,
        lecture_date: date,
        status: AttendanceStatus,
    ) -> UpsertOutcome:
        raise NotImplementedError

    def find_by_student(self, student_id: int) -> Iterator[StudentAttendanceRow]:
        raise NotImplementedError

    def find_by_course(self, course_id: int) -> Iterator[CourseAttendanceRow]:
        raise NotImplementedError

    def find_in_range(
        self,
        *,
        course_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def distinct_dates(
        self,
        *,
        course_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> set[date]:
        """Distinct lecture dates, inclusive bounds. Defines total lectures held."""

        raise NotImplementedError

    def count_by_status(self, *, course_id: int, student_id: int, status: AttendanceStatus) -> int:
        raise NotImplementedError

    def delete_all_for_course(self, course_id: int) -> int:
        """Only for the course deletion cascade."""

        raise NotImplementedError
