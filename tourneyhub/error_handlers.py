"""JSON error handlers registered application-wide."""

from flask import Blueprint, current_app, jsonify
from werkzeug.exceptions import HTTPException

from .errors import AppError

error_handlers_bp = Blueprint("error_handlers", __name__)

SERVER_ERROR_THRESHOLD = 500


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles application errors raised by the service layer."""
    if error.status_code >= SERVER_ERROR_THRESHOLD:
        current_app.logger.error(f"Application Error: {error.message}")
    else:
        current_app.logger.warning(
            f"{type(error).__name__}: {error.message}"
        )
    return jsonify({"error": error.message}), error.status_code


@error_handlers_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    """Handles werkzeug HTTP errors such as 404 and 405."""
    return jsonify({"error": e.description}), e.code


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return jsonify({"error": "An unexpected error occurred. Please try again."}), 500
