# -*- coding: utf-8 -*-
"""
Candidacy Filter - Cheap pre-check for possibly-installed items.

Decides from directory listings alone whether any file declared by a
catalog item could be on disk. Items that fail the check are reported
as not installed without hashing any of their files.

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
from enum import Enum
from typing import Mapping, Optional

# aucatalog internal
from aucatalog.catalog.models import CatalogItem, FileSpec
from aucatalog.catalog.paths import (
    APP_DIR, PLUGINS_DIR, SCRIPTS_DIR, expand, item_context, segments_after,
    token,
)
from aucatalog.catalog.snapshot import DirectorySnapshot


class Candidacy(Enum):
    """Outcome of the candidacy check for one item."""

    CANDIDATE = "candidate"
    NOT_CANDIDATE = "not_candidate"


def _matches_snapshot(template: str, name: str, snapshot: DirectorySnapshot) -> bool:
    segments = segments_after(template, name)
    if not segments:
        return False
    if len(segments) >= 2:
        return snapshot.has_folder(segments[0])
    return snapshot.has_file(segments[0])


def file_is_plausible(
    spec: FileSpec,
    plugins: DirectorySnapshot,
    scripts: DirectorySnapshot,
    host_present: bool,
    host_ext: str = ".exe",
    fields: Optional[Mapping[str, str]] = None,
) -> bool:
    """Whether one declared file could exist given the snapshots.

    Parameters
    ----------
    spec : FileSpec
        The declared file.
    plugins : DirectorySnapshot
        Snapshot of the plugin directory.
    scripts : DirectorySnapshot
        Snapshot of the script directory.
    host_present : bool
        Whether the host executable exists.
    host_ext : str
        Extension of the host executable.
    fields : Optional[Mapping[str, str]]
        Item level placeholders (``id``, ``version``) expanded before
        the template is checked against the snapshots.

    Returns
    -------
    bool
    """
    template = expand(spec.path, fields) if fields else spec.path
    if token(APP_DIR) in template and template.lower().endswith(host_ext.lower()):
        if host_present:
            return True
    if token(PLUGINS_DIR) in template and _matches_snapshot(template, PLUGINS_DIR, plugins):
        return True
    if token(SCRIPTS_DIR) in template and _matches_snapshot(template, SCRIPTS_DIR, scripts):
        return True
    return False


def check_candidacy(
    item: CatalogItem,
    plugins: DirectorySnapshot,
    scripts: DirectorySnapshot,
    host_present: bool,
    host_ext: str = ".exe",
) -> Candidacy:
    """Check whether any file of any version of ``item`` is plausible.

    Parameters
    ----------
    item : CatalogItem
    plugins : DirectorySnapshot
    scripts : DirectorySnapshot
    host_present : bool
    host_ext : str

    Returns
    -------
    Candidacy
        ``CANDIDATE`` on the first plausible file, otherwise
        ``NOT_CANDIDATE``.
    """
    for version in item.versions:
        fields = item_context({}, item.id, version.version)
        for spec in version.files:
            if file_is_plausible(
                spec, plugins, scripts, host_present, host_ext, fields
            ):
                return Candidacy.CANDIDATE
    return Candidacy.NOT_CANDIDATE
