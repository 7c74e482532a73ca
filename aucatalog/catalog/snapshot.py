# -*- coding: utf-8 -*-
"""
Directory Snapshot - Single-level listing of a host directory.

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
from typing import FrozenSet, Iterable, Optional

logger = logging.getLogger(__name__)


class DirectorySnapshot:
    """Immediate subfolder and file names of one directory.

    Parameters
    ----------
    path : str
        The scanned directory.
    folders : Iterable[str]
        Names of immediate subdirectories.
    files : Iterable[str]
        Names of immediate non-directory entries.
    """

    def __init__(
        self,
        path: str = "",
        folders: Iterable[str] = (),
        files: Iterable[str] = (),
    ) -> None:
        self.path = path
        self.folders = frozenset(folders)
        self.files = frozenset(files)
        self._folders_key: Optional[FrozenSet[str]] = None
        self._files_key: Optional[FrozenSet[str]] = None

    def has_folder(self, name: str) -> bool:
        """Case-insensitive membership test against folder names."""
        if self._folders_key is None:
            self._folders_key = frozenset(n.casefold() for n in self.folders)
        return name.casefold() in self._folders_key

    def has_file(self, name: str) -> bool:
        """Case-insensitive membership test against file names."""
        if self._files_key is None:
            self._files_key = frozenset(n.casefold() for n in self.files)
        return name.casefold() in self._files_key

    def __repr__(self) -> str:
        return (
            f"DirectorySnapshot(path={self.path!r}, "
            f"folders={len(self.folders)}, files={len(self.files)})"
        )


def scan(directory: str) -> DirectorySnapshot:
    """List the immediate children of a directory.

    Parameters
    ----------
    directory : str
        Directory to list. Empty or whitespace-only means unconfigured.

    Returns
    -------
    DirectorySnapshot
        Snapshot of the directory. Empty if it is unconfigured, missing
        or unreadable; the latter two are logged and not raised.
    """
    if not directory or not directory.strip():
        return DirectorySnapshot(path="")

    folders = []
    files = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                if is_dir:
                    folders.append(entry.name)
                else:
                    files.append(entry.name)
    except OSError as e:
        logger.warning("Cannot scan directory '%s': %s", directory, e)
        return DirectorySnapshot(path=directory)

    logger.debug(
        "Scanned '%s': %d folders, %d files",
        directory, len(folders), len(files),
    )
    return DirectorySnapshot(path=directory, folders=folders, files=files)
