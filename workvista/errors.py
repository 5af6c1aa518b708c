"""Error hierarchy mapped onto HTTP responses.

Every error carries a status code and a message that is safe to show to the
client. Store failures never expose driver details; those are logged instead.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException


class WorkVistaError(Exception):
    """Base class for failures that short-circuit a request."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class Unauthenticated(WorkVistaError):
    status_code = 401
    default_message = "unauthorized access"


class Forbidden(WorkVistaError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(WorkVistaError):
    status_code = 404
    default_message = "Not Found"


class ValidationFailed(WorkVistaError):
    status_code = 400
    default_message = "Invalid request payload"


class StoreError(WorkVistaError):
    """Wraps any failure raised by the document store driver."""

    status_code = 500
    default_message = "Internal Server Error"


def error_response(exc: WorkVistaError):
    """Render ``exc`` as a ``(response, status)`` pair."""
    return jsonify(exc.to_response()), exc.status_code


def register_error_handlers(app: Flask) -> None:
    """Attach JSON error handlers for domain and unexpected errors."""

    @app.errorhandler(WorkVistaError)
    def _handle_workvista_error(exc: WorkVistaError):
        if isinstance(exc, StoreError):
            current_app.logger.error(
                "Store failure on %s %s: %s", request.method, request.path, exc.__cause__ or exc
            )
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        # Keep the status and headers (Allow, Location, ...) and swap in a JSON body.
        response = exc.get_response()
        response.set_data(json.dumps({"message": exc.description}))
        response.content_type = "application/json"
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify(message="Internal Server Error"), 500
