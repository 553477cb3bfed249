from __future__ import annotations

import csv
import io

from flask import Flask, g, jsonify, request

from ..common.auth import make_login_required
from ..common.responses import error_response, server_error_response
from ..core.enums import Capability
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)

    def _build(params: dict):
        container.access_policy.require(g.user, Capability.VIEW_REPORTS)
        return container.report_service.build_report(
            params.get("courseId"),
            from_date=params.get("fromDate"),
            to_date=params.get("toDate"),
            min_percentage=params.get("minPercentage"),
        )

    def _write_report_csv(*, report, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=["studentId", "presentCount", "total", "percentage"])
        writer.writeheader()
        for entry in report.entries:
            writer.writerow(entry.to_dict())

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/report", methods=["POST"], endpoint="attendance_report")
    @login_required
    def report():
        """Body: {courseId, fromDate?, toDate?, minPercentage?}."""

        data = request.get_json(silent=True) or {}
        try:
            result = _build(data)
            return jsonify({"success": True, **result.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while building the report")

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    @login_required
    def report_csv():
        try:
            result = _build(request.args.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while exporting the report")

        suffix = ""
        if result.from_date or result.to_date:
            start = result.from_date.strftime("%Y%m%d") if result.from_date else "start"
            end = result.to_date.strftime("%Y%m%d") if result.to_date else "end"
            suffix = f"_{start}_{end}"
        return _write_report_csv(report=result, filename=f"course_{result.course_id}_attendance{suffix}.csv")

    @app.route("/api/courses/<int:course_id>/students", methods=["GET"], endpoint="course_roster_summary")
    @login_required
    def roster_summary(course_id: int):
        try:
            container.access_policy.require(g.user, Capability.VIEW_REPORTS)
            summary = container.report_service.build_roster_summary(course_id)
            return jsonify({"success": True, **summary.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while loading course students")
