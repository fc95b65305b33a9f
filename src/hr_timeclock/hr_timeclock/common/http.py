from __future__ import annotations

from flask import jsonify, request

from ..core.exceptions import (
    AlreadyClockedInError,
    DomainError,
    NotClockedInError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (AlreadyClockedInError, 409),
    (NotClockedInError, 409),
    (StoreUnavailableError, 503),
]


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def error_response(exc: DomainError):
    payload = {"success": False, "message": str(exc)}
    if isinstance(exc, ValidationError) and exc.errors:
        payload["errors"] = exc.errors
    return jsonify(payload), status_for(exc)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
