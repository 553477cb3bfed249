from __future__ import annotations

from functools import wraps

from flask import g, session

from ..core.exceptions import AuthenticationError
from .responses import error_response


def make_login_required(auth_service):
    """Build a view decorator that resolves the session identity into ``g.user``."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.user = auth_service.session_user(session.get("user_id"))
            except AuthenticationError as e:
                return error_response(e)
            return view(*args, **kwargs)

        return wrapper

    return login_required
