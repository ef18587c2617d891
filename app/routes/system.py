"""
System Routes - liveness
"""

from flask import Blueprint

from api_responses import success_response, handle_api_errors

system_bp = Blueprint("system", __name__, url_prefix="/api")


@system_bp.route("/system/health", methods=["GET"])
@handle_api_errors
def health_check_api():
    """Liveness probe"""
    return success_response(data={"status": "healthy", "api_version": "1.0"})
