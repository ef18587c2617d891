"""
API Response Utilities - the {code, success, data|message} envelope
"""

from flask import jsonify
from functools import wraps
import logging

from exceptions import LogosShelfException, status_code_for

logger = logging.getLogger(__name__)


# API Error Codes
class ErrorCode:
    SUCCESS = "SUCCESS"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def success_response(data=None, message=None, status_code=200):
    """
    Standard success response format for API endpoints
    """
    response = {"code": ErrorCode.SUCCESS, "success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return jsonify(response), status_code


def error_response(error_code, message, status_code):
    return jsonify({"code": error_code, "success": False, "message": message}), status_code


def exception_response(exc: LogosShelfException):
    """Report a catalog failure with its own code, e.g. CATALOG_NOT_FOUND"""
    return error_response(exc.code, exc.message, status_code_for(exc))


def handle_api_errors(f):
    """
    Decorator to standardize error handling for API endpoints
    Catalog failures keep their code; anything else becomes INTERNAL_ERROR
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except LogosShelfException as e:
            return exception_response(e)
        except Exception as e:
            logger.error(f"Unhandled exception in {f.__name__}: {e}", exc_info=True)
            return error_response(ErrorCode.INTERNAL_ERROR, "An unexpected error occurred", 500)

    return wrapper


def not_found_response(resource_type, resource_id):
    return error_response(
        ErrorCode.NOT_FOUND, f"{resource_type} with ID '{resource_id}' not found", 404
    )
