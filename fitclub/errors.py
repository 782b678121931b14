"""API error taxonomy and the Flask handlers that render it."""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db


class ApiError(Exception):
    """Base class for errors that map onto the JSON error envelope."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ApiError):
    code = "VALIDATION_ERROR"
    status_code = 400


class UnauthorizedError(ApiError):
    code = "UNAUTHORIZED"
    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ForbiddenError(ApiError):
    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class NotFoundError(ApiError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found")


class ConflictError(ApiError):
    code = "CONFLICT"
    status_code = 409


class DatabaseError(ApiError):
    code = "DATABASE_ERROR"
    status_code = 500

    def __init__(self, message: str = "Database error occurred") -> None:
        super().__init__(message)


class CapacityInvariantError(ApiError):
    """A capacity mutation would break ``0 <= spots_remaining <= capacity``."""

    code = "INTERNAL_ERROR"
    status_code = 500


def error_response(error: ApiError):
    return jsonify({"success": False, "error": error.to_dict()}), error.status_code


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            app.logger.error(f"API error {error.code}: {error.message}")
        return error_response(error)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        current_app.logger.exception("Database error")
        return error_response(DatabaseError())

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code == 404:
            return error_response(NotFoundError("Endpoint"))
        if error.code == 405:
            return error_response(
                ApiError("Method not allowed", code="METHOD_NOT_ALLOWED", status_code=405)
            )
        return error_response(
            ApiError(error.description or error.name, code="HTTP_ERROR", status_code=error.code)
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception("Unhandled error")
        return error_response(ApiError("Internal server error"))
