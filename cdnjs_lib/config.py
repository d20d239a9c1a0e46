"""Optional JSON configuration for the cdnjs lookup tool.

The tool reads an optional `cdnjs_config.json` (current directory by default)
to override the catalog endpoint, asset base URL, request timeout and cache
lifetime. Missing or unreadable files fall back to the built-in defaults.

Example:
    {
        "urls": {"packages": "https://cdnjs.com/packages.json"},
        "network": {"timeout": 10},
        "cache": {"ttl_hours": 12}
    }
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .constants import BASE_URL, CACHE_TTL_HOURS, CONFIG_FILENAME, PACKAGES_URL, REQUEST_TIMEOUT


def default_config() -> Dict:
    """Return a fresh copy of the built-in settings."""
    return {
        'urls': {
            'packages': PACKAGES_URL,
            'base': BASE_URL,
        },
        'network': {
            'timeout': REQUEST_TIMEOUT,
        },
        'cache': {
            'ttl_hours': CACHE_TTL_HOURS,
        },
    }


def load_config(path: Optional[Union[str, Path]] = None, logger: Optional[logging.Logger] = None) -> Dict:
    """Load settings from `path` (or `./cdnjs_config.json`) merged over the defaults.

    Only the known sections/keys are taken from the file; anything else is ignored.
    """
    cfg = default_config()
    cfg_path = Path(path) if path else Path.cwd() / CONFIG_FILENAME
    if not cfg_path.exists():
        if path and logger:
            logger.warning(f"Config file not found: {cfg_path}; using defaults")
        return cfg

    try:
        with open(cfg_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        if logger:
            logger.warning(f"Could not read config {cfg_path}: {e}; using defaults")
        return cfg

    if not isinstance(data, dict):
        if logger:
            logger.warning(f"Ignoring config {cfg_path}: top level is not an object")
        return cfg

    for section, values in cfg.items():
        overrides = data.get(section)
        if not isinstance(overrides, dict):
            continue
        for key in values:
            if key in overrides and overrides[key] is not None:
                values[key] = overrides[key]

    for key, fallback in (('packages', PACKAGES_URL), ('base', BASE_URL)):
        if not isinstance(cfg['urls'][key], str) or not cfg['urls'][key]:
            if logger:
                logger.warning(f"Invalid urls.{key} in {cfg_path}; using {fallback}")
            cfg['urls'][key] = fallback

    # Coerce numeric settings so a quoted value in JSON still works
    for section, key, fallback in (('network', 'timeout', REQUEST_TIMEOUT), ('cache', 'ttl_hours', CACHE_TTL_HOURS)):
        try:
            value = float(cfg[section][key])
        except (TypeError, ValueError):
            value = None
        # Also rejects NaN
        if value is None or not value > 0:
            if logger:
                logger.warning(f"Invalid {section}.{key} in {cfg_path}; using {fallback}")
            value = fallback
        cfg[section][key] = value

    if logger:
        logger.debug(f"Loaded config from {cfg_path}")
    return cfg
