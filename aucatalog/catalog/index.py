# -*- coding: utf-8 -*-
"""
Catalog Search Index - In-memory filter/sort index over catalog metadata.

Provides the CatalogIndex class, a normalized projection of the catalog
that answers free-text, tag and type filtered queries sorted by name or
release date. The index is replaced wholesale under an exclusive lock
and queried under a shared lock, so it can be owned by one component
and queried from any number of threads.

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
import threading
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# aucatalog internal
from aucatalog.catalog.models import CatalogItem, parse_catalog
from aucatalog.core.config import CatalogConfig
from aucatalog.core.text import normalize


SORT_NAME = "name"
SORT_NEWEST = "newest"
DIR_ASC = "asc"
DIR_DESC = "desc"


class CatalogIndexError(RuntimeError):
    """Raised when the index cannot be replaced."""


class ReadWriteLock:
    """Lock allowing many concurrent readers or one exclusive writer.

    New readers wait while a writer is queued.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self, timeout: Optional[float] = None) -> bool:
        with self._cond:
            ok = self._cond.wait_for(
                lambda: not self._writer and self._writers_waiting == 0,
                timeout,
            )
            if ok:
                self._readers += 1
            return ok

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: Optional[float] = None) -> bool:
        with self._cond:
            self._writers_waiting += 1
            try:
                ok = self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0, timeout
                )
            finally:
                self._writers_waiting -= 1
            if ok:
                self._writer = True
            else:
                self._cond.notify_all()
            return ok

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()


class IndexItem:
    """Search projection of one catalog item.

    Parameters
    ----------
    id : str
    name_key : str
        Normalized name.
    author_key : str
        Normalized author.
    summary_key : str
        Normalized summary.
    item_type : str
    tags : List[str]
    updated_at : Optional[int]
        Release date of the newest version as epoch milliseconds.
    """

    __slots__ = (
        'id', 'name_key', 'author_key', 'summary_key',
        'item_type', 'tags', 'updated_at',
    )

    def __init__(
        self,
        id: str,
        name_key: str,
        author_key: str,
        summary_key: str,
        item_type: str,
        tags: List[str],
        updated_at: Optional[int],
    ) -> None:
        self.id = id
        self.name_key = name_key
        self.author_key = author_key
        self.summary_key = summary_key
        self.item_type = item_type
        self.tags = tags
        self.updated_at = updated_at

    @classmethod
    def from_item(cls, item: CatalogItem) -> 'IndexItem':
        return cls(
            id=item.id,
            name_key=normalize(item.name),
            author_key=normalize(item.author),
            summary_key=normalize(item.summary),
            item_type=item.item_type,
            tags=list(item.tags),
            updated_at=parse_updated_at(item),
        )

    def matches_terms(self, terms: List[str]) -> bool:
        return all(
            t in self.name_key or t in self.author_key or t in self.summary_key
            for t in terms
        )

    def __repr__(self) -> str:
        return f"IndexItem(id={self.id!r}, name_key={self.name_key!r})"


def parse_updated_at(item: CatalogItem) -> Optional[int]:
    """Parse the newest version's release date.

    Accepts ``YYYY-MM-DD`` or ``YYYY/MM/DD``. Extra ``-`` separated
    parts are ignored.

    Parameters
    ----------
    item : CatalogItem

    Returns
    -------
    Optional[int]
        Epoch milliseconds at UTC midnight, or None if the item has no
        versions or the date cannot be parsed.
    """
    latest = item.latest
    if latest is None:
        return None
    parts = latest.release_date.replace('/', '-').split('-')
    if len(parts) < 3:
        return None
    try:
        year, month, day = (int(p.strip()) for p in parts[:3])
        dt = datetime(year, month, day, tzinfo=timezone.utc)
    except (ValueError, OverflowError):
        return None
    return int(dt.timestamp()) * 1000


def _newest_key(it: IndexItem) -> tuple:
    # Undated items order below dated ones before any reversal.
    if it.updated_at is None:
        return (0, 0, it.name_key)
    return (1, it.updated_at, it.name_key)


class CatalogIndex:
    """Queryable, thread-safe projection of the catalog.

    Parameters
    ----------
    lock_timeout : float
        Seconds to wait for the index lock before giving up. Default 5.0.
    """

    def __init__(self, lock_timeout: float = 5.0) -> None:
        self._lock = ReadWriteLock()
        self._lock_timeout = lock_timeout
        self._items: List[IndexItem] = []

    @classmethod
    def from_config(cls, config: CatalogConfig) -> 'CatalogIndex':
        return cls(lock_timeout=config.index_lock_timeout)

    def __len__(self) -> int:
        return len(self._items)

    def set_index(
        self,
        items: Iterable[Union[CatalogItem, Mapping[str, Any]]],
    ) -> int:
        """Replace the index with a fresh projection of ``items``.

        Items with an empty id are dropped silently.

        Parameters
        ----------
        items : Iterable[Union[CatalogItem, Mapping[str, Any]]]
            Catalog payload entries or parsed items.

        Returns
        -------
        int
            Number of indexed items.

        Raises
        ------
        CatalogIndexError
            If the index lock could not be acquired.
        """
        built = [IndexItem.from_item(it) for it in parse_catalog(items)]
        if not self._lock.acquire_write(self._lock_timeout):
            raise CatalogIndexError("catalog lock unavailable")
        try:
            self._items = built
            count = len(self._items)
        finally:
            self._lock.release_write()
        logger.info("Catalog index rebuilt with %d items", count)
        return count

    def query(
        self,
        text: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        types: Optional[Iterable[str]] = None,
        sort: Optional[str] = None,
        dir: Optional[str] = None,
    ) -> List[str]:
        """Filter and sort the indexed items.

        Parameters
        ----------
        text : Optional[str]
            Free text. Every whitespace-separated term must occur in
            the name, author or summary.
        tags : Optional[Iterable[str]]
            Keep items carrying any of these tags.
        types : Optional[Iterable[str]]
            Keep items of any of these types.
        sort : Optional[str]
            ``"name"`` or ``"newest"`` (default). Unknown keys sort by
            date like ``"newest"``.
        dir : Optional[str]
            ``"asc"`` or ``"desc"``. Defaults to ``"asc"`` for name and
            ``"desc"`` otherwise.

        Returns
        -------
        List[str]
            Item ids in result order. Empty if the lock is unavailable.
        """
        terms = normalize(text or "").split()
        tag_filter = set(tags or ())
        type_filter = set(types or ())
        sort_key = sort or SORT_NEWEST
        dir_key = dir or (DIR_ASC if sort_key == SORT_NAME else DIR_DESC)

        if not self._lock.acquire_read(self._lock_timeout):
            logger.warning("Catalog index busy; returning no results")
            return []
        try:
            filtered = [
                it for it in self._items
                if (not terms or it.matches_terms(terms))
                and (not tag_filter or any(t in tag_filter for t in it.tags))
                and (not type_filter or it.item_type in type_filter)
            ]
        finally:
            self._lock.release_read()

        if sort_key == SORT_NAME:
            filtered.sort(key=lambda it: it.name_key)
        else:
            filtered.sort(key=_newest_key)
        if dir_key == DIR_DESC:
            filtered.reverse()
        return [it.id for it in filtered]
