from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    StorageFailure,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (StorageFailure, 503),
)


def error_response(exc: DomainError):
    """Shared JSON answer for domain errors raised by services."""

    status = 400
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status = code
            break

    body = {"success": False, "message": str(exc)}
    if isinstance(exc, StorageFailure) and exc.attempted is not None:
        body["attempted"] = exc.attempted
        body["applied"] = exc.applied
    return jsonify(body), status


def server_error_response(message: str):
    logger.exception(message)
    return jsonify({"success": False, "message": message}), 500
