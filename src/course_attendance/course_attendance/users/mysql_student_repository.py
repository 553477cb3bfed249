from __future__ import annotations

from typing import Iterable, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_id, user_id, enrollment_number FROM students WHERE student_id=%s",
                (int(student_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Student(
                student_id=int(r["student_id"]),
                user_id=int(r["user_id"]),
                enrollment_number=r["enrollment_number"],
            )

    def existing_ids(self, student_ids: Iterable[int]) -> set[int]:
        ids = sorted({int(i) for i in student_ids})
        if not ids:
            return set()
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT student_id FROM students WHERE student_id IN ({placeholders})", tuple(ids))
            return {int(r["student_id"]) for r in fetchall(cur)}
