from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import PERCENTAGE_DECIMALS


def format_percentage(value: float, decimals: int = PERCENTAGE_DECIMALS) -> str:
    return f"{value:.{decimals}f}"


@dataclass(frozen=True)
class ReportEntry:
    """Numeric per-student line of a course report."""

    student_id: int
    present_count: int
    total: int
    percentage: float

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "presentCount": self.present_count,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class AttendanceReport:
    course_id: int
    total_lectures: int
    entries: list[ReportEntry]
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    min_percentage: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "courseId": self.course_id,
            "fromDate": self.from_date.strftime("%Y-%m-%d") if self.from_date else None,
            "toDate": self.to_date.strftime("%Y-%m-%d") if self.to_date else None,
            "minPercentage": self.min_percentage,
            "totalLectures": self.total_lectures,
            "report": [e.to_dict() for e in self.entries],
        }


@dataclass(frozen=True)
class RosterSummaryRow:
    """Display line for an enrolled student; percentage is a two-decimal string."""

    student_id: int
    enrollment_number: str
    full_name: str
    email: str
    present_count: int
    total_lectures: int
    percentage: str

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "enrollmentNumber": self.enrollment_number,
            "name": self.full_name,
            "email": self.email,
            "presentCount": self.present_count,
            "totalLectures": self.total_lectures,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class RosterSummary:
    course_id: int
    title: str
    code: str
    students: list[RosterSummaryRow]

    def to_dict(self) -> dict:
        return {
            "course": {"courseId": self.course_id, "title": self.title, "code": self.code},
            "students": [s.to_dict() for s in self.students],
        }
