from flask import current_app, jsonify

from smart_library.errors import (
    AuthenticationError,
    EligibilityError,
    InvalidStateError,
    InvariantViolation,
    LibraryError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (EligibilityError, 409),
    (InvalidStateError, 409),
    (InvariantViolation, 500),
)


def json_error(message, code=400, kind=None):
    body = {"success": False, "message": message}
    if kind:
        body["error"] = kind
    return jsonify(body), code


def error_response(error: LibraryError):
    code = 400
    for error_cls, status in STATUS_BY_ERROR:
        if isinstance(error, error_cls):
            code = status
            break
    kind = type(error).__name__
    if code >= 500:
        current_app.logger.error(f"[api] {kind}: {error}")
        return json_error("Internal consistency error", code, kind)
    return json_error(str(error), code, kind)
