"""
Catalog discovery: find the Logos catalog.db on disk and stamp it with its mtime
"""
import os
import stat
import logging
from typing import List, Optional

from constants import CATALOG_RELATIVE_PATH, CATALOG_NOT_FOUND_HINT
from exceptions import CatalogNotFoundException, CatalogAccessDeniedException
from models import CatalogLocation
from utils import expand_home, mtime_millis

# Retrieve main logger
logger = logging.getLogger("main")


def stat_catalog(path: str) -> Optional[CatalogLocation]:
    """Stat a catalog file, None when it is absent or not a regular file.

    A permission failure is reported as access denied, never as absence.
    """
    try:
        stats = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except PermissionError as e:
        raise CatalogAccessDeniedException(f"Permission denied reading {path}: {e}")
    if not stat.S_ISREG(stats.st_mode):
        return None
    return CatalogLocation(path=path, mtime_millis=mtime_millis(stats))


def _resolve_override(override_path: str) -> CatalogLocation:
    full_path = expand_home(override_path)
    location = stat_catalog(full_path)
    if location is None:
        raise CatalogNotFoundException(f"catalog.db not found at {full_path}")
    return location


def find_catalog_candidates(base_dir: str) -> List[CatalogLocation]:
    """Probe every account folder one level below base_dir for a catalog file.

    Folders are visited in name order so equal mtimes resolve the same way
    on every run.
    """
    try:
        with os.scandir(base_dir) as entries:
            folders = sorted(entry.path for entry in entries if entry.is_dir())
    except (FileNotFoundError, NotADirectoryError):
        logger.warning(f"Logos data directory {base_dir} does not exist")
        raise CatalogNotFoundException(CATALOG_NOT_FOUND_HINT)
    except PermissionError as e:
        raise CatalogAccessDeniedException(f"Permission denied listing {base_dir}: {e}")

    candidates = []
    for folder in folders:
        location = stat_catalog(os.path.join(folder, CATALOG_RELATIVE_PATH))
        if location is not None:
            candidates.append(location)
    return candidates


def resolve_catalog(override_path: Optional[str] = None, base_dir: Optional[str] = None) -> CatalogLocation:
    """Locate the catalog database.

    An explicit override is authoritative: when it does not exist the lookup
    fails without scanning the install directory. Otherwise the newest
    catalog across all account folders under base_dir wins.
    """
    if override_path and override_path.strip():
        location = _resolve_override(override_path.strip())
        logger.debug(f"Using configured catalog at {location.path}")
        return location

    if not base_dir:
        raise CatalogNotFoundException(CATALOG_NOT_FOUND_HINT)
    base_dir = expand_home(base_dir)

    candidates = find_catalog_candidates(base_dir)
    if not candidates:
        logger.warning(f"No {CATALOG_RELATIVE_PATH} found under {base_dir}")
        raise CatalogNotFoundException(
            f"No catalog.db found under {base_dir}. Launch Logos once, then try again."
        )

    # sorted() is stable with reverse=True, so ties keep folder order
    newest = sorted(candidates, key=lambda c: c.mtime_millis, reverse=True)[0]
    if len(candidates) > 1:
        logger.info(f"Found {len(candidates)} catalogs, using most recent: {newest.path}")
    return newest
