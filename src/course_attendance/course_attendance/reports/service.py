from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateLike, normalize_optional_date
from ..common.validators import optional_number, require_int_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.model import Course
from ..courses.repository import CourseRepository
from .calculator.base import PercentageCalculator
from .calculator.standard_calculator import StandardPercentageCalculator
from .filters import filter_by_min_percentage
from .model import AttendanceReport, ReportEntry, RosterSummary, RosterSummaryRow, format_percentage


class AttendanceReportService:
    """Aggregation of attendance marks into per-student percentages.

    Two views exist and are kept apart:

    - ``build_report``: numeric report over the matched records only. A
      student without any mark in the range does not appear.
    - ``build_roster_summary``: every enrolled student, all dates, with the
      percentage as a two-decimal display string.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        courses: CourseRepository,
        *,
        calculator: Optional[PercentageCalculator] = None,
    ):
        self._attendance = attendance
        self._courses = courses
        self._calculator = calculator or StandardPercentageCalculator()

    def _get_course(self, course_id: Any) -> Course:
        course_id = require_int_id(course_id, "courseId")
        course = self._courses.get_by_id(course_id)
        if not course:
            raise NotFoundError(f"Course {course_id} not found")
        return course

    def build_report(
        self,
        course_id: Any,
        from_date: Optional[DateLike] = None,
        to_date: Optional[DateLike] = None,
        min_percentage: Optional[Any] = None,
    ) -> AttendanceReport:
        course = self._get_course(course_id)
        start: Optional[date] = normalize_optional_date(from_date, "fromDate")
        end: Optional[date] = normalize_optional_date(to_date, "toDate")
        if start and end and start > end:
            raise ValidationError("fromDate must not be after toDate")
        threshold = optional_number(min_percentage, "minPercentage")

        records = self._attendance.find_in_range(course_id=course.course_id, start_date=start, end_date=end)
        # Lectures come from the same read as the marks, so present <= total holds.
        total_lectures = len({r.lecture_date for r in records})

        present_by_student: dict[int, int] = {}
        for r in records:
            present_by_student.setdefault(r.student_id, 0)
            if r.status == AttendanceStatus.PRESENT:
                present_by_student[r.student_id] += 1

        entries = [
            ReportEntry(
                student_id=student_id,
                present_count=present,
                total=total_lectures,
                percentage=self._calculator.percentage(present, total_lectures),
            )
            for student_id, present in sorted(present_by_student.items())
        ]

        return AttendanceReport(
            course_id=course.course_id,
            total_lectures=total_lectures,
            entries=filter_by_min_percentage(entries, threshold),
            from_date=start,
            to_date=end,
            min_percentage=threshold,
        )

    def build_roster_summary(self, course_id: Any) -> RosterSummary:
        course = self._get_course(course_id)
        roster = self._courses.list_roster(course.course_id)
        present_by_student = {
            student.student_id: self._attendance.count_by_status(
                course_id=course.course_id,
                student_id=student.student_id,
                status=AttendanceStatus.PRESENT,
            )
            for student in roster
        }
        # Dates are read after the counts: every counted mark has its date here.
        total_lectures = len(self._attendance.distinct_dates(course_id=course.course_id))

        rows: list[RosterSummaryRow] = []
        for student in roster:
            present = present_by_student[student.student_id]
            rows.append(
                RosterSummaryRow(
                    student_id=student.student_id,
                    enrollment_number=student.enrollment_number,
                    full_name=student.full_name,
                    email=student.email,
                    present_count=present,
                    total_lectures=total_lectures,
                    percentage=format_percentage(self._calculator.percentage(present, total_lectures)),
                )
            )

        return RosterSummary(course_id=course.course_id, title=course.title, code=course.code, students=rows)
