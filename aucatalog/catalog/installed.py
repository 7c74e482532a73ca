# -*- coding: utf-8 -*-
"""
Installed Map - JSON record of installed catalog items.

Provides the InstalledStore class that keeps an ``installed.json``
map of item id to installed version, either maintained explicitly by
install/uninstall steps or replaced by a detection snapshot.

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
from pathlib import Path
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# aucatalog internal
from aucatalog.catalog.resolver import INSTALLED_FILE, resolve_store_path


class InstalledStore:
    """JSON-backed map of installed item ids to versions.

    Parameters
    ----------
    path : Optional[Path]
        Path to the JSON file. If None, ``installed.json`` in the
        resolved configuration directory.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path else resolve_store_path(INSTALLED_FILE)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Dict[str, str]:
        """Read the map. Missing or corrupt files read as empty.

        Returns
        -------
        Dict[str, str]
        """
        if not self._path.exists():
            return {}
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def write(self, installed: Mapping[str, str]) -> None:
        """Replace the stored map.

        Raises
        ------
        OSError
            If the file cannot be written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, 'w', encoding='utf-8') as f:
            json.dump(dict(installed), f, indent=2, ensure_ascii=False)

    def add(self, item_id: str, version: Optional[str] = None) -> Dict[str, str]:
        """Record ``item_id`` as installed.

        Parameters
        ----------
        item_id : str
        version : Optional[str]
            Installed version. Stored as ``""`` if None.

        Returns
        -------
        Dict[str, str]
            The updated map.
        """
        installed = self.read()
        installed[item_id] = version or ""
        self.write(installed)
        return installed

    def remove(self, item_id: str) -> Dict[str, str]:
        """Forget ``item_id``.

        Returns
        -------
        Dict[str, str]
            The updated map.
        """
        installed = self.read()
        installed.pop(item_id, None)
        self.write(installed)
        return installed

    def save_snapshot(self, detected: Mapping[str, str]) -> Dict[str, str]:
        """Replace the map with a detection result.

        Items detected as not installed are left out.

        Parameters
        ----------
        detected : Mapping[str, str]
            Output of a detection pass.

        Returns
        -------
        Dict[str, str]
            The stored snapshot.
        """
        snapshot = {k: str(v) for k, v in detected.items() if v}
        self.write(snapshot)
        logger.info("Saved installed snapshot with %d items", len(snapshot))
        return snapshot
