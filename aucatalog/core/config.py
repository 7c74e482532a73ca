# -*- coding: utf-8 -*-
"""
Configuration Module - Settings and directory roots for aucatalog.

Provides a CatalogConfig dataclass holding the host application root,
the plugin and script directories, and tuning values for detection and
search. Loads from ``settings.json`` in the aucatalog configuration
directory if it exists, otherwise uses sensible defaults.

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
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# aucatalog internal
from aucatalog.catalog.resolver import resolve_store_path, SETTINGS_FILE

_DEFAULT_PROGRAMDATA = "C:\\ProgramData"
_HOST_DATA_DIR = "aviutl2"


@dataclass
class AppDirs:
    """Concrete directory roots substituted into catalog path templates.

    Attributes
    ----------
    app_dir : str
        Host application root (``{appDir}``).
    data_dir : str
        Host data directory (``{dataDir}``).
    plugins_dir : str
        Plugin directory (``{pluginsDir}``).
    scripts_dir : str
        Script directory (``{scriptsDir}``).
    """

    app_dir: str = ""
    data_dir: str = ""
    plugins_dir: str = ""
    scripts_dir: str = ""


@dataclass
class CatalogConfig:
    """Global aucatalog configuration with defaults.

    Attributes
    ----------
    app_root : str
        Host application root directory. Empty means unconfigured.
    plugins_dir : str
        Explicit plugin directory. Derived from the data dir if empty.
    scripts_dir : str
        Explicit script directory. Derived from the data dir if empty.
    is_portable_mode : bool
        If True the host keeps its data under ``<app_root>/data``,
        otherwise under ``%PROGRAMDATA%/aviutl2``.
    host_executable : str
        File name of the host executable inside ``app_root``.
    index_lock_timeout : float
        Seconds to wait for the search index lock.
    prune_hash_cache : bool
        Drop hash cache entries for files that no longer exist.
    log_max_lines : int
        Number of lines kept when the log file is pruned.
    max_workers : int
        Maximum worker threads for background detection passes.
    """

    app_root: str = ""
    plugins_dir: str = ""
    scripts_dir: str = ""
    is_portable_mode: bool = False
    host_executable: str = "aviutl2.exe"
    index_lock_timeout: float = 5.0
    prune_hash_cache: bool = False
    log_max_lines: int = 1000
    max_workers: int = 2

    def dirs(self) -> AppDirs:
        """Derive the directory roots from this configuration.

        Returns
        -------
        AppDirs
            Directory roots. Entries are empty when they cannot be
            derived (no root configured and no explicit override).
        """
        app_dir = self.app_root.strip()
        data_dir = ""
        if app_dir:
            if self.is_portable_mode:
                data_dir = os.path.join(app_dir, "data")
            else:
                program_data = os.environ.get("PROGRAMDATA") or _DEFAULT_PROGRAMDATA
                data_dir = os.path.join(program_data, _HOST_DATA_DIR)

        plugins_dir = self.plugins_dir.strip()
        if not plugins_dir and data_dir:
            plugins_dir = os.path.join(data_dir, "Plugin")
        scripts_dir = self.scripts_dir.strip()
        if not scripts_dir and data_dir:
            scripts_dir = os.path.join(data_dir, "Script")

        return AppDirs(
            app_dir=app_dir,
            data_dir=data_dir,
            plugins_dir=plugins_dir,
            scripts_dir=scripts_dir,
        )

    def save(self, path: Optional[Path] = None) -> None:
        """Save config to JSON file."""
        path = Path(path) if path else resolve_store_path(SETTINGS_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)


def load_config(path: Optional[Path] = None) -> CatalogConfig:
    """Load configuration from file, or return defaults.

    Parameters
    ----------
    path : Optional[Path]
        Config file path. Defaults to ``settings.json`` in the
        resolved configuration directory.

    Returns
    -------
    CatalogConfig
        Loaded or default configuration.
    """
    path = Path(path) if path else resolve_store_path(SETTINGS_FILE)
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return CatalogConfig(**{
                k: v for k, v in data.items()
                if k in CatalogConfig.__dataclass_fields__
            })
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Failed to load config from %s: %s", path, e)

    return CatalogConfig()
