from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.repository import CourseRepository
from .courses.service import CourseService
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import AttendanceReportService
from .users.access import AccessPolicy
from .users.mysql_student_repository import MySQLStudentRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import StudentRepository, UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    students_repo: StudentRepository
    courses_repo: CourseRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    access_policy: AccessPolicy
    course_service: CourseService
    attendance_service: AttendanceService
    report_service: AttendanceReportService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def wire(
    *,
    users_repo: UserRepository,
    students_repo: StudentRepository,
    courses_repo: CourseRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services over the given repositories (MySQL or in-memory)."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        students_repo=students_repo,
        courses_repo=courses_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        access_policy=AccessPolicy(),
        course_service=CourseService(courses_repo, students_repo, attendance_repo),
        attendance_service=AttendanceService(attendance_repo, courses_repo, students_repo),
        report_service=AttendanceReportService(attendance_repo, courses_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).open()
    return wire(
        users_repo=MySQLUserRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        courses_repo=MySQLCourseRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        conn=conn,
    )
