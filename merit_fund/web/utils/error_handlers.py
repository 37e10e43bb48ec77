from typing import Any, Tuple, Union
from flask import jsonify, render_template, request
from werkzeug.exceptions import HTTPException
import logging

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Custom exception for service-level errors."""
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def handle_service_error(error: Exception) -> Union[HTTPException, Tuple[Any, int]]:
    """Handle service errors and return appropriate response."""
    if isinstance(error, HTTPException):
        return error

    if isinstance(error, ServiceError):
        status_code = error.status_code
        message = error.message
    else:
        status_code = 500
        message = "An unexpected error occurred"
        logger.error(f"Unexpected error: {str(error)}", exc_info=True)

    # Check if the request was for an API endpoint
    if request.path.startswith('/api/'):
        return jsonify({
            "success": False,
            "error": message
        }), status_code

    # For web pages, render error template
    return render_template('error.html',
                           message=message,
                           show_details=status_code == 500,
                           error_details=str(error) if status_code == 500 else None), status_code


def register_error_handlers(app) -> None:
    """Attach the handlers to a Flask app."""
    app.register_error_handler(ServiceError, handle_service_error)
    app.register_error_handler(Exception, handle_service_error)
