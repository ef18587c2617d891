"""
LogosShelf - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = structlog.get_logger('exceptions')


class LogosShelfException(Exception):
    """Base exception for LogosShelf"""
    def __init__(self, message: str, code: str = "LOGOSSHELF_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'error': True,
            'code': self.code,
            'message': self.message
        }


class CatalogNotFoundException(LogosShelfException):
    """No catalog database could be located"""
    def __init__(self, message: str):
        super().__init__(message, code="CATALOG_NOT_FOUND")
        logger.warning(f"Catalog not found: {message}")


class CatalogAccessDeniedException(LogosShelfException):
    """Filesystem refused access to the catalog or its install directory"""
    def __init__(self, message: str):
        super().__init__(message, code="CATALOG_ACCESS_DENIED")
        logger.error(f"Catalog access denied: {message}")


class CatalogUnreadableException(LogosShelfException):
    """Catalog file exists but is not a readable database"""
    def __init__(self, message: str):
        super().__init__(message, code="CATALOG_UNREADABLE")
        logger.error(f"Catalog unreadable: {message}")


class SchemaNotFoundException(LogosShelfException):
    """No table in the catalog exposes both an id and a title column"""
    def __init__(self, message: str = "Could not find a resource table inside catalog.db"):
        super().__init__(message, code="SCHEMA_NOT_FOUND")
        logger.error(f"Schema inference failed: {message}")


class MalformedCacheException(LogosShelfException):
    """Persisted cache payload does not have the expected shape"""
    def __init__(self, message: str):
        super().__init__(message, code="MALFORMED_CACHE")


class CacheWriteException(LogosShelfException):
    """Cache payload could not be persisted"""
    def __init__(self, message: str):
        super().__init__(message, code="CACHE_WRITE_FAILED")


def register_exception_handlers(app):
    """Render routing errors (unknown URL, wrong method) in the JSON error shape.

    Catalog failures inside routes are reported by handle_api_errors.
    """

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return jsonify({
            'code': e.name.upper().replace(' ', '_'),
            'success': False,
            'message': e.description
        }), e.code


def status_code_for(exc):
    """HTTP status used when a load error is reported through an API envelope"""
    if isinstance(exc, CatalogNotFoundException):
        return 404
    if isinstance(exc, CatalogAccessDeniedException):
        return 403
    if isinstance(exc, (CatalogUnreadableException, SchemaNotFoundException)):
        return 422
    return 500
