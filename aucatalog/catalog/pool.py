# -*- coding: utf-8 -*-
"""
ThreadExecutorPool - Thread pool for background catalog operations.

Provides a managed thread pool for running detection passes and status
checks off the caller's thread. Each job still runs its own pass
synchronously.

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
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Iterable, Mapping, Union

logger = logging.getLogger(__name__)

# aucatalog internal
from aucatalog.catalog.detector import VersionDetector
from aucatalog.catalog.models import CatalogItem
from aucatalog.catalog.updater import UpdateChecker
from aucatalog.core.config import CatalogConfig


class ThreadExecutorPool:
    """Manages a pool of worker threads for background catalog operations.

    Parameters
    ----------
    max_workers : int
        Maximum number of concurrent threads. Default 2.
    """

    def __init__(self, max_workers: int = 2) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers)

    @classmethod
    def from_config(cls, config: CatalogConfig) -> 'ThreadExecutorPool':
        return cls(max_workers=config.max_workers)

    def submit_detection(
        self,
        detector: VersionDetector,
        items: Iterable[Union[CatalogItem, Mapping[str, Any]]],
    ) -> Future:
        """Submit a detection pass to run in the background.

        Parameters
        ----------
        detector : VersionDetector
            The detector to run.
        items : Iterable[Union[CatalogItem, Mapping[str, Any]]]
            Catalog payload.

        Returns
        -------
        Future
            Future resolving to Dict[str, str].
        """
        items = list(items)
        logger.info("Submitting detection pass for %d items", len(items))
        return self._executor.submit(detector.detect_versions_map, items)

    def submit_update_check(self, checker: UpdateChecker) -> Future:
        """Submit a status check job to run in the background.

        Returns
        -------
        Future
            Future resolving to List[UpdateResult].
        """
        return self._executor.submit(checker.run)

    def shutdown(self, wait: bool = True) -> None:
        """Shut down the thread pool.

        Parameters
        ----------
        wait : bool
            If True, wait for running tasks to complete.
        """
        self._executor.shutdown(wait=wait)
