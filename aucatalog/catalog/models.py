# -*- coding: utf-8 -*-
"""
Catalog Models - Data models for catalog items and their manifests.

Defines the CatalogItem, VersionEntry and FileSpec models parsed from
the catalog payload, and the UpdateResult model produced by the
install status checker.

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
from typing import Any, Iterable, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

NOT_INSTALLED = ""
UNKNOWN_VERSION = "???"

_HASH_KEYS = ('XXH3_128', 'xxh3_128')


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


class FileSpec:
    """One file belonging to a released version.

    Parameters
    ----------
    path : str
        Path template, may contain ``{placeholder}`` tokens.
    hash : str
        Expected xxh3-128 hex digest. Empty means the file can never
        match.
    """

    def __init__(self, path: str, hash: str = "") -> None:
        self.path = path
        self.hash = hash

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FileSpec':
        expected = ""
        for key in _HASH_KEYS:
            expected = _str(data.get(key))
            if expected:
                break
        return cls(path=_str(data.get('path')), hash=expected)

    def __repr__(self) -> str:
        return f"FileSpec(path={self.path!r}, hash={self.hash!r})"


class VersionEntry:
    """One released version of a catalog item.

    Parameters
    ----------
    version : str
        Version label reported when this version is detected.
    files : Optional[List[FileSpec]]
        Files that make up the version. An empty list never matches.
    release_date : str
        Release date, ``YYYY-MM-DD`` or ``YYYY/MM/DD``.
    """

    def __init__(
        self,
        version: str,
        files: Optional[List[FileSpec]] = None,
        release_date: str = "",
    ) -> None:
        self.version = version
        self.files = files or []
        self.release_date = release_date

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'VersionEntry':
        files = [
            FileSpec.from_dict(f) for f in _list(data.get('file'))
            if isinstance(f, Mapping)
        ]
        return cls(
            version=_str(data.get('version')),
            files=files,
            release_date=_str(data.get('release_date')),
        )

    def __repr__(self) -> str:
        return (
            f"VersionEntry(version={self.version!r}, "
            f"files={len(self.files)})"
        )


class CatalogItem:
    """Metadata for one installable package in the catalog.

    Parameters
    ----------
    id : str
        Unique item identifier.
    name : str
        Display name.
    author : str
        Author name.
    summary : str
        One-line description.
    item_type : str
        Package type (e.g. plugin, script).
    tags : Optional[List[str]]
        Free-form tags.
    versions : Optional[List[VersionEntry]]
        Released versions, oldest first. The last entry is the newest.
    """

    def __init__(
        self,
        id: str,
        name: str = "",
        author: str = "",
        summary: str = "",
        item_type: str = "",
        tags: Optional[List[str]] = None,
        versions: Optional[List[VersionEntry]] = None,
    ) -> None:
        self.id = id
        self.name = name
        self.author = author
        self.summary = summary
        self.item_type = item_type
        self.tags = tags or []
        self.versions = versions or []

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CatalogItem':
        """Build an item from one catalog payload entry.

        The version array is read from ``versions`` and, if that key
        is absent, from ``version``.
        """
        raw_versions = data.get('versions')
        if raw_versions is None:
            raw_versions = data.get('version')
        versions = [
            VersionEntry.from_dict(v) for v in _list(raw_versions)
            if isinstance(v, Mapping)
        ]
        tags = [t for t in _list(data.get('tags')) if isinstance(t, str)]
        return cls(
            id=_str(data.get('id')),
            name=_str(data.get('name')),
            author=_str(data.get('author')),
            summary=_str(data.get('summary')),
            item_type=_str(data.get('type')),
            tags=tags,
            versions=versions,
        )

    @property
    def latest(self) -> Optional[VersionEntry]:
        """Newest version entry, or None if the item has no versions."""
        return self.versions[-1] if self.versions else None

    def __repr__(self) -> str:
        return (
            f"CatalogItem(id={self.id!r}, name={self.name!r}, "
            f"versions={len(self.versions)})"
        )


def coerce_item(item: Union[CatalogItem, Mapping[str, Any]]) -> CatalogItem:
    """Return ``item`` as a CatalogItem, parsing payload mappings."""
    if isinstance(item, CatalogItem):
        return item
    if isinstance(item, Mapping):
        return CatalogItem.from_dict(item)
    raise ValueError(f"catalog item must be a mapping, got {type(item).__name__}")


def parse_catalog(
    items: Iterable[Union[CatalogItem, Mapping[str, Any]]],
) -> List[CatalogItem]:
    """Parse a catalog payload, dropping items with an empty id.

    Entries that are neither mappings nor CatalogItems are skipped with
    a warning.

    Parameters
    ----------
    items : Iterable[Union[CatalogItem, Mapping[str, Any]]]
        Catalog payload entries or already-built items.

    Returns
    -------
    List[CatalogItem]
        Items in payload order.
    """
    parsed: List[CatalogItem] = []
    for it in items:
        if not isinstance(it, (CatalogItem, Mapping)):
            logger.warning(
                "Skipping catalog entry of type %s", type(it).__name__
            )
            continue
        item = coerce_item(it)
        if item.id:
            parsed.append(item)
    return parsed


class UpdateResult:
    """Install status of a single catalog item.

    Parameters
    ----------
    item : CatalogItem
        The item that was checked.
    installed_version : str
        Detected version, ``""`` if not installed, ``"???"`` if
        unrecognized.
    latest_version : str
        Label of the newest version in the catalog.
    update_available : bool
        Whether the installed copy is older than the catalog's latest.
    """

    def __init__(
        self,
        item: CatalogItem,
        installed_version: str,
        latest_version: str,
        update_available: bool = False,
    ) -> None:
        self.item = item
        self.installed_version = installed_version
        self.latest_version = latest_version
        self.update_available = update_available

    @property
    def installed(self) -> bool:
        return self.installed_version != NOT_INSTALLED

    @property
    def is_latest(self) -> bool:
        return bool(self.installed_version) and bool(self.latest_version) \
            and self.installed_version == self.latest_version

    def __repr__(self) -> str:
        if self.update_available:
            return (
                f"UpdateResult({self.item.id!r}: "
                f"{self.installed_version} → {self.latest_version})"
            )
        if not self.installed:
            return f"UpdateResult({self.item.id!r}: not installed)"
        return f"UpdateResult({self.item.id!r}: {self.installed_version})"
