from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Course, RosterStudent
from .repository import CourseRepository


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, course_id: int) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT course_id, title, code, teacher_id FROM courses WHERE course_id=%s",
                (int(course_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Course(
                course_id=int(r["course_id"]),
                title=r["title"],
                code=r["code"],
                teacher_id=int(r["teacher_id"]) if r.get("teacher_id") is not None else None,
            )

    def list_roster(self, course_id: int) -> Sequence[RosterStudent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.student_id, s.user_id, s.enrollment_number, u.full_name, u.email
                FROM course_students cs
                JOIN students s ON s.student_id = cs.student_id
                JOIN users u ON u.user_id = s.user_id
                WHERE cs.course_id=%s
                ORDER BY s.student_id ASC
                """,
                (int(course_id),),
            )
            return [
                RosterStudent(
                    student_id=int(r["student_id"]),
                    user_id=int(r["user_id"]),
                    enrollment_number=r["enrollment_number"],
                    full_name=r["full_name"],
                    email=r["email"],
                )
                for r in fetchall(cur)
            ]

    def enroll_student(self, *, course_id: int, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO course_students(course_id, student_id) VALUES(%s,%s)",
                (int(course_id), int(student_id)),
            )
            return cur.rowcount > 0

    def remove_student(self, *, course_id: int, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM course_students WHERE course_id=%s AND student_id=%s",
                (int(course_id), int(student_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, course_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM course_students WHERE course_id=%s", (int(course_id),))
            cur.execute("DELETE FROM courses WHERE course_id=%s", (int(course_id),))
            return cur.rowcount > 0
