# -*- coding: utf-8 -*-
"""
Update Checker - Derive install and update status for catalog items.

Combines a detection result with the catalog's newest version labels
to report, per item, whether it is installed, up to date, or has an
update available.

Dependencies
------------
packaging

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
from typing import Any, Iterable, List, Mapping, Union

# Third-party
from packaging.version import Version, InvalidVersion

logger = logging.getLogger(__name__)

# aucatalog internal
from aucatalog.catalog.models import (
    CatalogItem, UNKNOWN_VERSION, UpdateResult, coerce_item, parse_catalog,
)


def latest_version_of(item: Union[CatalogItem, Mapping[str, Any]]) -> str:
    """Label of the newest (last) version of an item, or ``""``."""
    latest = coerce_item(item).latest
    return latest.version if latest is not None else ""


class UpdateChecker:
    """Compare detected versions against the catalog.

    Parameters
    ----------
    items : Iterable[Union[CatalogItem, Mapping[str, Any]]]
        Catalog payload entries or parsed items.
    detected : Mapping[str, str]
        Output of a detection pass, item id to detected version.
    """

    def __init__(
        self,
        items: Iterable[Union[CatalogItem, Mapping[str, Any]]],
        detected: Mapping[str, str],
    ) -> None:
        self._items = parse_catalog(items)
        self._detected = dict(detected)

    def _is_newer(self, current: str, latest: str) -> bool:
        """Compare version labels.

        Parameters
        ----------
        current : str
        latest : str

        Returns
        -------
        bool
            True if latest is newer than current. Labels that do not
            parse as versions are newer whenever they differ.
        """
        if not latest or current == latest:
            return False
        if current == UNKNOWN_VERSION:
            return True
        try:
            return Version(latest) > Version(current)
        except InvalidVersion:
            return True

    def run(self) -> List[UpdateResult]:
        """Compute the status of every catalog item.

        Returns
        -------
        List[UpdateResult]
            One result per item with a non-empty id, in catalog order.
        """
        results: List[UpdateResult] = []
        for item in self._items:
            installed_version = self._detected.get(item.id, "")
            latest = latest_version_of(item)
            update_available = bool(installed_version) and self._is_newer(
                installed_version, latest
            )
            results.append(UpdateResult(
                item=item,
                installed_version=installed_version,
                latest_version=latest,
                update_available=update_available,
            ))

        pending = sum(1 for r in results if r.update_available)
        logger.info(
            "Status check done count=%d updates=%d", len(results), pending
        )
        return results
