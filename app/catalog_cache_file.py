"""
Catalog File-Based Cache
Persists the last extraction so an unchanged catalog.db is not re-read
"""
import json
import os
import logging
from typing import Optional

from constants import CATALOG_CACHE_FILE
from exceptions import MalformedCacheException, CacheWriteException
from models import CachePayload, CatalogLocation, ResourceRecord
from utils import safe_write_json

logger = logging.getLogger("main")


def parse_cache_payload(data) -> CachePayload:
    """Validate a decoded cache document, raising MalformedCacheException"""
    if not isinstance(data, dict):
        raise MalformedCacheException("cache root is not an object")

    source_path = data.get("source_path")
    source_mtime = data.get("source_mtime_millis")
    records = data.get("records")

    if not isinstance(source_path, str) or not source_path:
        raise MalformedCacheException("missing source_path")
    if isinstance(source_mtime, bool) or not isinstance(source_mtime, (int, float)):
        raise MalformedCacheException("missing or non-numeric source_mtime_millis")
    if not isinstance(records, list):
        raise MalformedCacheException("records is not a list")

    try:
        resources = [ResourceRecord.from_dict(entry) for entry in records]
    except ValueError as e:
        raise MalformedCacheException(f"invalid record: {e}")

    return CachePayload(source_path=source_path, source_mtime_millis=source_mtime, records=resources)


def read_cache(cache_path: str = CATALOG_CACHE_FILE) -> Optional[CachePayload]:
    """
    Load the persisted catalog extraction

    Returns:
        CachePayload, or None when the cache is missing, unreadable or malformed
    """
    try:
        with open(cache_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        payload = parse_cache_payload(data)
    except FileNotFoundError:
        logger.debug("Catalog cache does not exist")
        return None
    except MalformedCacheException as e:
        logger.warning(f"Ignoring malformed catalog cache {cache_path}: {e.message}")
        return None
    except (OSError, ValueError) as e:
        # ValueError covers JSONDecodeError and bad encodings
        logger.error(f"Failed to read catalog cache {cache_path}: {e}")
        return None

    logger.debug(f"Loaded {len(payload.records)} resources from catalog cache")
    return payload


def _persist(cache_path: str, payload: CachePayload) -> None:
    try:
        os.makedirs(os.path.dirname(cache_path) or ".", exist_ok=True)
        safe_write_json(cache_path, payload.to_dict())
    except (OSError, TypeError, ValueError) as e:
        raise CacheWriteException(str(e))


def write_cache(cache_path: str, payload: CachePayload) -> bool:
    """
    Persist a catalog extraction

    Returns:
        True if saved successfully, False otherwise. Failures are logged only.
    """
    try:
        _persist(cache_path, payload)
    except CacheWriteException as e:
        logger.error(f"Failed to write catalog cache {cache_path}: {e.message}")
        return False

    logger.info(f"Catalog cache saved: {len(payload.records)} resources")
    return True


def is_cache_fresh(payload: Optional[CachePayload], location: CatalogLocation) -> bool:
    """Usable only when path and mtime are identical to the current catalog"""
    return payload is not None and payload.matches(location)
