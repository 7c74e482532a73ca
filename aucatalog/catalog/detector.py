# -*- coding: utf-8 -*-
"""
Version Detector - Resolve installed catalog versions from the filesystem.

Runs one reconciliation pass over a catalog: scans the plugin and
script directories once, short-circuits items whose files cannot be
present, fingerprints the remaining files through the HashCache, and
reports per item the newest version whose whole file set matches.

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
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# aucatalog internal
from aucatalog.catalog.candidacy import Candidacy, check_candidacy
from aucatalog.catalog.hashing import HashCache, hashes_match
from aucatalog.catalog.models import (
    CatalogItem, NOT_INSTALLED, UNKNOWN_VERSION, VersionEntry, parse_catalog,
)
from aucatalog.catalog.paths import (
    APP_DIR, PLUGINS_DIR, SCRIPTS_DIR, build_context, expand_path,
    has_placeholder, item_context,
)
from aucatalog.catalog.resolver import HASH_CACHE_FILE, resolve_store_path
from aucatalog.catalog.snapshot import DirectorySnapshot, scan
from aucatalog.core.config import CatalogConfig, load_config


class VersionDetector:
    """Detect installed versions of catalog items.

    Parameters
    ----------
    context : Mapping[str, str]
        Placeholder context (``appDir``, ``pluginsDir``, ...). Missing
        roots are simply not scanned.
    hash_cache : HashCache
        Fingerprint cache consulted for every expanded path.
    host_executable : str
        File name of the host executable inside ``{appDir}``.
    prune_cache : bool
        Drop cache entries for vanished files before saving.
    """

    def __init__(
        self,
        context: Mapping[str, str],
        hash_cache: HashCache,
        host_executable: str = "aviutl2.exe",
        prune_cache: bool = False,
    ) -> None:
        self._context = dict(context)
        self._cache = hash_cache
        self._host_executable = host_executable
        self._host_ext = os.path.splitext(host_executable)[1] or ".exe"
        self._prune_cache = prune_cache

    @classmethod
    def from_config(
        cls,
        config: CatalogConfig,
        cache_path: Optional[Path] = None,
    ) -> 'VersionDetector':
        """Build a detector from the loaded configuration."""
        cache_path = cache_path or resolve_store_path(HASH_CACHE_FILE)
        return cls(
            context=build_context(config.dirs()),
            hash_cache=HashCache(cache_path),
            host_executable=config.host_executable,
            prune_cache=config.prune_hash_cache,
        )

    @property
    def hash_cache(self) -> HashCache:
        return self._cache

    def scan_roots(self) -> Tuple[DirectorySnapshot, DirectorySnapshot, bool]:
        """Snapshot the plugin and script dirs and check for the host.

        Returns
        -------
        Tuple[DirectorySnapshot, DirectorySnapshot, bool]
            Plugin snapshot, script snapshot, and whether the host
            executable exists.
        """
        plugins = scan(self._context.get(PLUGINS_DIR, ""))
        scripts = scan(self._context.get(SCRIPTS_DIR, ""))
        app_dir = self._context.get(APP_DIR, "")
        host_present = bool(app_dir) and os.path.isfile(
            os.path.join(app_dir, self._host_executable)
        )
        return plugins, scripts, host_present

    def _file_hash(
        self, template: str, context: Mapping[str, str],
    ) -> Optional[str]:
        path = expand_path(template, context)
        if not template or has_placeholder(path):
            return None
        return self._cache.get_or_compute(path)

    def _match_version(
        self, item: CatalogItem, version: VersionEntry,
    ) -> Tuple[bool, bool, bool]:
        """Compare every file of one version against the disk.

        Templates are expanded with the roots plus the item id and the
        version label.

        Returns
        -------
        Tuple[bool, bool, bool]
            ``(matched, any_present, any_mismatch)``.
        """
        matched = bool(version.files)
        any_present = False
        any_mismatch = False
        context = item_context(self._context, item.id, version.version)
        for spec in version.files:
            found = self._file_hash(spec.path, context)
            ok = hashes_match(found or "", spec.hash)
            if found:
                any_present = True
                if spec.hash and not ok:
                    any_mismatch = True
            if not ok:
                matched = False
        return matched, any_present, any_mismatch

    def resolve_item(
        self,
        item: CatalogItem,
        plugins: DirectorySnapshot,
        scripts: DirectorySnapshot,
        host_present: bool,
    ) -> str:
        """Resolve the installed version of one item.

        Versions are visited newest first (reverse payload order) and
        the first one whose whole file set matches wins.

        Parameters
        ----------
        item : CatalogItem
        plugins : DirectorySnapshot
        scripts : DirectorySnapshot
        host_present : bool

        Returns
        -------
        str
            The version label, ``"???"`` if files of the item are on
            disk but no version matches, or ``""`` if nothing is
            installed.
        """
        candidacy = check_candidacy(
            item, plugins, scripts, host_present, self._host_ext
        )
        if candidacy is Candidacy.NOT_CANDIDATE:
            return NOT_INSTALLED

        any_present = False
        any_mismatch = False
        for version in reversed(item.versions):
            if not version.files:
                continue
            matched, present, mismatch = self._match_version(item, version)
            if matched:
                return version.version
            any_present = any_present or present
            any_mismatch = any_mismatch or mismatch

        if any_present or any_mismatch:
            return UNKNOWN_VERSION
        return NOT_INSTALLED

    def detect_versions_map(
        self,
        items: Iterable[Union[CatalogItem, Mapping[str, Any]]],
    ) -> Dict[str, str]:
        """Run one reconciliation pass over a catalog.

        The hash cache is read once before and written once after the
        pass.

        Parameters
        ----------
        items : Iterable[Union[CatalogItem, Mapping[str, Any]]]
            Catalog payload entries or parsed items.

        Returns
        -------
        Dict[str, str]
            One entry per item with a non-empty id.
        """
        catalog = parse_catalog(items)
        logger.info("detect map start count=%d", len(catalog))

        self._cache.load()
        hashed_before = self._cache.computed
        plugins, scripts, host_present = self.scan_roots()

        out: Dict[str, str] = {}
        for item in catalog:
            out[item.id] = self.resolve_item(
                item, plugins, scripts, host_present
            )

        if self._prune_cache:
            self._cache.prune()
        self._cache.save()

        installed = sum(1 for v in out.values() if v)
        logger.info(
            "detect all done count=%d installed=%d hashed=%d",
            len(out), installed, self._cache.computed - hashed_before,
        )
        return out


def detect_versions_map(
    items: Iterable[Union[CatalogItem, Mapping[str, Any]]],
    config: Optional[CatalogConfig] = None,
    cache_path: Optional[Path] = None,
) -> Dict[str, str]:
    """Detect installed versions using the stored configuration.

    Parameters
    ----------
    items : Iterable[Union[CatalogItem, Mapping[str, Any]]]
        Catalog payload.
    config : Optional[CatalogConfig]
        Configuration. Loaded from ``settings.json`` if None.
    cache_path : Optional[Path]
        Hash cache store. Defaults to ``hash-cache.json`` in the
        configuration directory.

    Returns
    -------
    Dict[str, str]
    """
    config = config or load_config()
    detector = VersionDetector.from_config(config, cache_path=cache_path)
    return detector.detect_versions_map(items)
