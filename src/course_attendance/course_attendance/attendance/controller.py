from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.auth import make_login_required
from ..common.responses import error_response, server_error_response
from ..common.validators import require_int_id
from ..core.enums import Capability
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def mark():
        """Teacher marks a whole lecture: {courseId, date, records: [{studentId, status}]}."""

        data = request.get_json(silent=True) or {}
        try:
            container.access_policy.require_role(g.user, Capability.MARK_ATTENDANCE)
            course = container.course_service.get(require_int_id(data.get("courseId"), "courseId"))
            container.access_policy.require(g.user, Capability.MARK_ATTENDANCE, course)

            result = container.attendance_service.mark_attendance(
                course.course_id,
                data.get("date"),
                data.get("records"),
            )
            return jsonify({"success": True, "message": "Attendance marked successfully", "result": result.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while marking attendance")

    @app.route("/api/attendance/student/<int:student_id>", methods=["GET"], endpoint="attendance_by_student")
    @login_required
    def by_student(student_id: int):
        try:
            container.access_policy.require(g.user, Capability.LOOKUP)
            rows = container.attendance_service.student_history(student_id)
            return jsonify({"success": True, "records": [row.to_dict() for row in rows]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while loading student attendance")

    @app.route("/api/attendance/course/<int:course_id>", methods=["GET"], endpoint="attendance_by_course")
    @login_required
    def by_course(course_id: int):
        try:
            container.access_policy.require(g.user, Capability.LOOKUP)
            rows = container.attendance_service.course_history(course_id)
            return jsonify({"success": True, "records": [row.to_dict() for row in rows]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while loading course attendance")
