"""
Library Routes - search and rebuild the indexed Logos catalog
"""

import logging

from flask import Blueprint, request

from api_responses import (
    success_response,
    handle_api_errors,
    not_found_response,
)
from constants import SEARCH_PAGE_SIZE
from library import get_catalog_library
from links import resource_links, logosres_uri
import settings as settings_lib

logger = logging.getLogger("main")

library_bp = Blueprint("library", __name__, url_prefix="/api")


def serialize_resource(record, scheme):
    item = record.to_dict()
    item["uri"] = logosres_uri(record.id)
    item["links"] = resource_links(record.id, scheme)
    return item


def _open_scheme(library):
    return settings_lib.get_open_scheme(library.loader.settings)


@library_bp.route("/library/search")
@handle_api_errors
def search_library_api():
    """Fuzzy search over titles, authors, abbreviations and ids"""
    query = request.args.get("q", "")
    limit = request.args.get("limit", SEARCH_PAGE_SIZE, type=int)
    limit = min(max(1, limit), SEARCH_PAGE_SIZE)

    library = get_catalog_library()
    state = library.ensure_loaded()
    if state.error is not None:
        raise state.error

    results = library.search(query, limit)
    scheme = _open_scheme(library)
    return success_response(
        data={
            "count": len(results),
            "results": [serialize_resource(record, scheme) for record in results],
            "source_path": state.source_path,
        }
    )


@library_bp.route("/library/rebuild", methods=["POST"])
@handle_api_errors
def rebuild_library_api():
    """Re-read catalog.db, bypassing the cache"""
    library = get_catalog_library()
    state = library.rebuild(force_refresh=True)
    if state.error is not None:
        raise state.error
    return success_response(
        data={"count": len(state.records), "source_path": state.source_path},
        message="Library indexed",
    )


@library_bp.route("/library/status")
@handle_api_errors
def library_status_api():
    return success_response(data=get_catalog_library().status())


@library_bp.route("/library/resources/<path:resource_id>/links")
@handle_api_errors
def resource_links_api(resource_id):
    library = get_catalog_library()
    state = library.ensure_loaded()
    if state.error is not None:
        raise state.error

    record = library.get(resource_id)
    if record is None:
        return not_found_response("Resource", resource_id)
    return success_response(data=serialize_resource(record, _open_scheme(library)))
