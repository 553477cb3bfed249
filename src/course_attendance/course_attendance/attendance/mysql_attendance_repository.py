from __future__ import annotations

from datetime import date
from typing import Iterator, Optional, Sequence

from ..core.enums import AttendanceStatus, UpsertOutcome
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, iter_rows
from .model import AttendanceRecord, CourseAttendanceRow, StudentAttendanceRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = "ar.attendance_id, ar.course_id, ar.student_id, ar.lecture_date, ar.status, ar.created_at, ar.updated_at"


def _range_clauses(course_id: int, start_date: Optional[date], end_date: Optional[date]):
    clauses = ["ar.course_id=%s"]
    params: list[object] = [int(course_id)]
    if start_date is not None:
        clauses.append("ar.lecture_date >= %s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("ar.lecture_date <= %s")
        params.append(end_date)
    return " AND ".join(clauses), params


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        course_id=int(r["course_id"]),
        student_id=int(r["student_id"]),
        lecture_date=r["lecture_date"],
        status=AttendanceStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        course_id: int,
        student_id: int,
        lecture_date: date,
        status: AttendanceStatus,
    ) -> UpsertOutcome:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(course_id, student_id, lecture_date, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (int(course_id), int(student_id), lecture_date, status.value),
            )
            # MySQL reports 1 affected row for an insert, 2 for a changed row, 0 for an unchanged one.
            return UpsertOutcome.INSERTED if cur.rowcount == 1 else UpsertOutcome.UPDATED

    def find_by_student(self, student_id: int) -> Iterator[StudentAttendanceRow]:
        rows = iter_rows(
            self._conn_factory,
            f"""
            SELECT {_RECORD_COLUMNS}, c.title, c.code
            FROM attendance_records ar
            JOIN courses c ON c.course_id = ar.course_id
            WHERE ar.student_id=%s
            ORDER BY ar.lecture_date DESC, ar.course_id ASC
            """,
            (int(student_id),),
        )
        for r in rows:
            yield StudentAttendanceRow(record=_to_record(r), course_title=r["title"], course_code=r["code"])

    def find_by_course(self, course_id: int) -> Iterator[CourseAttendanceRow]:
        rows = iter_rows(
            self._conn_factory,
            f"""
            SELECT {_RECORD_COLUMNS}, s.enrollment_number, u.full_name, c.title
            FROM attendance_records ar
            JOIN courses c ON c.course_id = ar.course_id
            JOIN students s ON s.student_id = ar.student_id
            JOIN users u ON u.user_id = s.user_id
            WHERE ar.course_id=%s
            ORDER BY ar.lecture_date DESC, ar.student_id ASC
            """,
            (int(course_id),),
        )
        for r in rows:
            yield CourseAttendanceRow(
                record=_to_record(r),
                enrollment_number=r["enrollment_number"],
                student_name=r["full_name"],
                course_title=r["title"],
            )

    def find_in_range(
        self,
        *,
        course_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        where, params = _range_clauses(course_id, start_date, end_date)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE {where}
                ORDER BY ar.student_id ASC, ar.lecture_date ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def distinct_dates(
        self,
        *,
        course_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> set[date]:
        where, params = _range_clauses(course_id, start_date, end_date)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT DISTINCT ar.lecture_date FROM attendance_records ar WHERE {where}",
                tuple(params),
            )
            return {r["lecture_date"] for r in fetchall(cur)}

    def count_by_status(self, *, course_id: int, student_id: int, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS cnt
                FROM attendance_records
                WHERE course_id=%s AND student_id=%s AND status=%s
                """,
                (int(course_id), int(student_id), status.value),
            )
            r = fetchone(cur)
            return int(r["cnt"]) if r else 0

    def delete_all_for_course(self, course_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE course_id=%s", (int(course_id),))
            return int(cur.rowcount)
