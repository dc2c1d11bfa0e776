"""Error handling middleware for API requests.

This module provides error handling for API requests.
"""

import logging
import traceback
from typing import Any, Iterable, List, Tuple

from flask import Flask, Response, current_app, jsonify
from flask_pydantic.exceptions import (  # type: ignore
    ValidationError as RequestValidationError,
)
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from support_chat.src.api.middleware.exceptions import APIError, ErrorResponseModel

logger = logging.getLogger(__name__)


def is_development() -> bool:
    """Whether the running app exposes internal error details."""
    return current_app.config.get("ENVIRONMENT") == "development"


def _format_errors(errors: Iterable[Any]) -> str:
    # Pydantic error dicts may carry exception objects, so details are stringified
    return "\n".join([str(e) for e in errors])


def register_error_handlers(app: Flask) -> None:
    """Register error handlers with the Flask application.

    Args:
        app: Flask application
    """

    @app.errorhandler(RequestValidationError)
    def handle_request_validation_error(error: RequestValidationError) -> Tuple[Response, int]:  # type: ignore
        """Handle request validation errors raised by flask_pydantic.

        Args:
            error: Validation error with per-location pydantic errors

        Returns:
            JSON response with error details
        """
        errors: List[Any] = []
        for location in ("body_params", "form_params", "path_params", "query_params"):
            errors.extend(getattr(error, location, None) or [])
        logger.warning(f"Request validation error: {errors}")

        response = ErrorResponseModel(
            error="Validation error", details=_format_errors(errors), status_code=400
        )
        return jsonify(response.model_dump()), 400

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_validation_error(error: PydanticValidationError) -> Tuple[Response, int]:  # type: ignore
        """Handle Pydantic validation errors.

        Args:
            error: Validation error from Pydantic

        Returns:
            JSON response with error details
        """
        logger.warning(f"Validation error: {error}")

        response = ErrorResponseModel(
            error="Validation error",
            details=_format_errors(error.errors()),
            status_code=400,
        )
        return jsonify(response.model_dump()), 400

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError) -> Tuple[Response, int]:  # type: ignore
        """Handle custom API errors.

        Args:
            error: Custom API error

        Returns:
            JSON response with error details
        """
        logger.error(f"API error ({error.__class__.__name__}): {error.message}")
        if error.details:
            logger.error(f"Error details: {error.details}")

        return error.to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> Tuple[Response, int]:  # type: ignore
        """Handle routing and protocol errors such as 404, 405 and 413."""
        status_code = error.code or 500
        logger.warning(f"HTTP error {status_code}: {error.description}")

        response = ErrorResponseModel(
            error=error.name, details=error.description, status_code=status_code
        )
        return jsonify(response.model_dump()), status_code

    @app.errorhandler(Exception)
    def handle_exception(error: Exception) -> Tuple[Response, int]:  # type: ignore
        """Handle uncaught exceptions.

        Args:
            error: Exception that was raised

        Returns:
            JSON response with error message
        """
        logger.error(f"Unhandled exception: {str(error)}")
        logger.error(traceback.format_exc())

        # Only include detailed error info in development
        details = str(error) if is_development() else None

        response = ErrorResponseModel(
            error="Internal server error", details=details, status_code=500
        )
        return jsonify(response.model_dump()), 500
