from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for (course, student, lecture date)."""

    attendance_id: int
    course_id: int
    student_id: int
    lecture_date: date
    status: AttendanceStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class StudentAttendanceRow:
    """Read-model for a student's history: record plus minimal course identity."""

    record: AttendanceRecord
    course_title: str
    course_code: str

    def to_dict(self) -> dict:
        return {
            **_record_dict(self.record),
            "course": {"course_id": self.record.course_id, "title": self.course_title, "code": self.course_code},
        }


@dataclass(frozen=True)
class CourseAttendanceRow:
    """Read-model for a course's history: record plus minimal student identity."""

    record: AttendanceRecord
    enrollment_number: str
    student_name: str
    course_title: str

    def to_dict(self) -> dict:
        return {
            **_record_dict(self.record),
            "student": {
                "student_id": self.record.student_id,
                "enrollment_number": self.enrollment_number,
                "full_name": self.student_name,
            },
            "course": {"course_id": self.record.course_id, "title": self.course_title},
        }


@dataclass(frozen=True)
class MarkEntry:
    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class MarkResult:
    """Outcome counts of a bulk marking call (observability, not per-record status)."""

    course_id: int
    lecture_date: date
    inserted: int
    updated: int

    @property
    def total(self) -> int:
        return self.inserted + self.updated

    def to_dict(self) -> dict:
        return {
            "course_id": self.course_id,
            "date": self.lecture_date.strftime("%Y-%m-%d"),
            "inserted": self.inserted,
            "updated": self.updated,
            "total": self.total,
        }


def _record_dict(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "course_id": r.course_id,
        "student_id": r.student_id,
        "date": r.lecture_date.strftime("%Y-%m-%d"),
        "status": r.status.value,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "updated_at": r.updated_at.isoformat() if r.updated_at else None,
    }
