from __future__ import annotations

from datetime import timedelta

from flask import Flask, g, jsonify, request, session

from ..common.auth import make_login_required
from ..common.responses import error_response, server_error_response
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error_response("Server error while logging in")

        session.clear()
        session.permanent = bool(data.get("remember"))
        session["user_id"] = s_user.user_id
        session["role"] = s_user.role.value
        return jsonify(
            {
                "success": True,
                "user": {"userId": s_user.user_id, "name": s_user.full_name, "role": s_user.role.value},
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"success": True, "user": {"userId": g.user.user_id, "name": g.user.full_name, "role": g.user.role.value}})
