"""
Deep links understood by the Logos desktop app
"""
from urllib.parse import quote

from constants import OPEN_SCHEME_LOGOS4


def logosres_uri(resource_id):
    return f"logosres:{resource_id}"


def logos4_uri(resource_id):
    return f"logos4:Open?resource={quote(resource_id, safe='')}"


def resource_links(resource_id, scheme=None):
    """Candidate URIs for opening a resource, preferred scheme first"""
    links = [logosres_uri(resource_id), logos4_uri(resource_id)]
    if scheme == OPEN_SCHEME_LOGOS4:
        links.reverse()
    return links
