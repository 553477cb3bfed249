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

    @app.route("/api/courses/<int:course_id>/roster", methods=["GET"], endpoint="course_roster")
    @login_required
    def roster(course_id: int):
        try:
            container.access_policy.require(g.user, Capability.VIEW_REPORTS)
            students = container.course_service.roster(course_id)
            return jsonify({"success": True, "students": [s.to_dict() for s in students]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while loading the course roster")

    @app.route("/api/courses/<int:course_id>/enroll", methods=["POST"], endpoint="course_enroll")
    @login_required
    def enroll(course_id: int):
        data = request.get_json(silent=True) or {}
        try:
            container.access_policy.require(g.user, Capability.MANAGE_COURSES)
            added = container.course_service.enroll_student(
                course_id=course_id,
                student_id=require_int_id(data.get("studentId"), "studentId"),
            )
            message = "Student enrolled successfully" if added else "Student already enrolled"
            return jsonify({"success": True, "message": message})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while enrolling student")

    @app.route("/api/courses/<int:course_id>/remove-student", methods=["POST"], endpoint="course_remove_student")
    @login_required
    def remove_student(course_id: int):
        data = request.get_json(silent=True) or {}
        try:
            container.access_policy.require(g.user, Capability.MANAGE_COURSES)
            container.course_service.remove_student(
                course_id=course_id,
                student_id=require_int_id(data.get("studentId"), "studentId"),
            )
            return jsonify({"success": True, "message": "Student removed from course"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while removing student")

    @app.route("/api/courses/<int:course_id>/delete", methods=["POST"], endpoint="course_delete")
    @login_required
    def delete(course_id: int):
        try:
            container.access_policy.require(g.user, Capability.MANAGE_COURSES)
            course = container.course_service.delete_course(course_id)
            return jsonify(
                {
                    "success": True,
                    "message": "Course deleted",
                    "deletedCourse": {"courseId": course.course_id, "title": course.title, "code": course.code},
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while deleting course")
