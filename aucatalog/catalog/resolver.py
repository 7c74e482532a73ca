# -*- coding: utf-8 -*-
"""
Store Path Resolver - Locate the aucatalog configuration directory.

Resolves the directory holding ``settings.json``, ``hash-cache.json``,
``installed.json`` and the log file using a priority chain:
1. AUCATALOG_CONFIG_DIR environment variable (highest priority)
2. ~/.aucatalog/config.json "config_dir" field
3. ~/.aucatalog (default fallback)

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
import json
import os
from pathlib import Path


_ENV_VAR = "AUCATALOG_CONFIG_DIR"
_CONFIG_DIR = ".aucatalog"
_CONFIG_FILE = "config.json"

SETTINGS_FILE = "settings.json"
HASH_CACHE_FILE = "hash-cache.json"
INSTALLED_FILE = "installed.json"
LOG_FILE = os.path.join("logs", "app.log")


def resolve_config_dir() -> Path:
    """Resolve the aucatalog configuration directory.

    Priority:
    1. ``AUCATALOG_CONFIG_DIR`` environment variable
    2. ``~/.aucatalog/config.json`` → ``config_dir`` field
    3. ``~/.aucatalog`` (default)

    Returns
    -------
    Path
        Resolved configuration directory. It is not created.
    """
    # Priority 1: Environment variable
    env_path = os.environ.get(_ENV_VAR)
    if env_path:
        return Path(env_path)

    default_dir = Path.home() / _CONFIG_DIR

    # Priority 2: Pointer file
    config_path = default_dir / _CONFIG_FILE
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
            config_dir = config.get('config_dir')
            if config_dir:
                return Path(config_dir)
        except (json.JSONDecodeError, OSError, AttributeError):
            pass

    # Priority 3: Default location
    return default_dir


def resolve_store_path(name: str) -> Path:
    """Resolve a file inside the configuration directory.

    Parameters
    ----------
    name : str
        File name relative to the configuration directory, e.g.
        ``HASH_CACHE_FILE``.

    Returns
    -------
    Path
    """
    return resolve_config_dir() / name


def ensure_config_dir() -> Path:
    """Ensure the configuration directory exists.

    Returns
    -------
    Path
        Path to the configuration directory.
    """
    config_dir = resolve_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
