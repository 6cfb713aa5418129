import logging

from flask import jsonify
from marshmallow import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException

log = logging.getLogger("notebin.error")


class ApiError(Exception):
    status_code = 400
    code = "bad_request"

    def __init__(self, message, status_code=None, code=None, details=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details or {}


class ValidationError(ApiError):
    """Empty or malformed title/content, fixable by the caller."""
    status_code = 400
    code = "validation_error"


class Unauthenticated(ApiError):
    status_code = 401
    code = "token_missing"

    def __init__(self, message="No token provided", **kwargs):
        super().__init__(message, **kwargs)


class InvalidCredential(ApiError):
    status_code = 401
    code = "token_invalid"

    def __init__(self, message="Invalid token", **kwargs):
        super().__init__(message, **kwargs)


class NotFoundOrNotOwned(ApiError):
    """Raised both for missing rows and rows owned by someone else,
    so a caller can never probe for other users' ids."""
    status_code = 404
    code = "not_found"


class Conflict(ApiError):
    status_code = 409
    code = "conflict"


class TransactionFailure(ApiError):
    """A trash/restore move was rolled back. Never retried."""
    status_code = 500
    code = "transaction_failed"

    def __init__(self, message="Internal server error.", **kwargs):
        super().__init__(message, **kwargs)


def _json_error(message, status, code, details=None):
    return jsonify({
        "error": {"code": code, "message": message, "details": details or {}}
    }), status

def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        return _json_error(e.message, e.status_code, e.code, e.details)

    @app.errorhandler(SchemaValidationError)
    def handle_validation_error(e: SchemaValidationError):
        return _json_error("Invalid request body.", 400, "validation_error", e.messages)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # 404, 405, 413...
        return _json_error(e.description or "HTTP error", e.code or 500, "http_error")

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        log.exception("unhandled_exception")
        return _json_error("Internal server error.", 500, "internal_error")
