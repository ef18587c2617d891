import copy
import math
import os
import logging

import yaml

from constants import (
    CONFIG_DIR,
    CONFIG_FILE,
    DEFAULT_SETTINGS,
    DEFAULT_FUZZY_THRESHOLD,
    DEFAULT_CATALOG_BASE_DIR,
    OPEN_SCHEME_LOGOSRES,
    OPEN_SCHEME_LOGOS4,
)

# Retrieve main logger
logger = logging.getLogger("main")


# Cache variable
_cached_settings = None


def _merge_with_defaults(settings):
    # Deep merge with defaults so new keys are always present
    merged_settings = copy.deepcopy(DEFAULT_SETTINGS)
    for section, values in (settings or {}).items():
        if isinstance(values, dict) and section in merged_settings and isinstance(merged_settings[section], dict):
            merged_settings[section].update(values)
        else:
            merged_settings[section] = values
    return merged_settings


def load_settings(force=False):
    global _cached_settings

    if _cached_settings and not force:
        return _cached_settings

    if os.path.exists(CONFIG_FILE):
        logger.debug(f"Reading configuration file: {CONFIG_FILE}")
        with open(CONFIG_FILE, "r") as yaml_file:
            settings = yaml.safe_load(yaml_file) or {}
        settings = _merge_with_defaults(settings)
    else:
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        try:
            os.makedirs(CONFIG_DIR, exist_ok=True)
            with open(CONFIG_FILE, "w") as yaml_file:
                yaml.dump(settings, yaml_file)
        except OSError as e:
            logger.warning(f"Could not write default configuration to {CONFIG_FILE}: {e}")

    _cached_settings = settings
    return settings


def reload_conf():
    """Reload application settings cache"""
    global _cached_settings
    _cached_settings = None
    return load_settings(force=True)


def get_catalog_settings(settings=None):
    if settings is None:
        settings = load_settings()
    return _merge_with_defaults(settings)["catalog"]


def get_catalog_override(settings=None):
    """Configured catalog path, or None when auto-discovery should run"""
    value = get_catalog_settings(settings).get("path")
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def get_catalog_base_dir(settings=None):
    value = get_catalog_settings(settings).get("base_dir")
    if not isinstance(value, str) or not value.strip():
        value = DEFAULT_CATALOG_BASE_DIR
    return os.path.expanduser(value.strip())


def get_fuzzy_threshold(settings=None):
    value = get_catalog_settings(settings).get("fuzzy_threshold")
    if isinstance(value, bool) or value is None:
        return DEFAULT_FUZZY_THRESHOLD
    try:
        threshold = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric fuzzy threshold {value!r}")
        return DEFAULT_FUZZY_THRESHOLD
    if not math.isfinite(threshold):
        return DEFAULT_FUZZY_THRESHOLD
    return threshold


def get_open_scheme(settings=None):
    value = get_catalog_settings(settings).get("open_scheme")
    if value == OPEN_SCHEME_LOGOS4:
        return OPEN_SCHEME_LOGOS4
    return OPEN_SCHEME_LOGOSRES
