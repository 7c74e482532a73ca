# -*- coding: utf-8 -*-
"""
Content Hashing - xxh3-128 file fingerprints and their persistent cache.

Provides the ``hash_file`` primitive, the byte-order tolerant
comparison used when matching against catalog manifests, and a
HashCache that memoizes fingerprints in ``hash-cache.json`` keyed by
lowercased absolute path and invalidated by modification time and size.

Dependencies
------------
xxhash

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
import stat
from pathlib import Path
from typing import Callable, Dict, Optional, Set, Tuple

# Third-party
import xxhash

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1 << 20

_HASH_FIELD = "xxh3_128"
_MTIME_FIELD = "mtimeMs"
_SIZE_FIELD = "size"


def hash_file(path: str) -> str:
    """Compute the xxh3-128 fingerprint of a file's full content.

    Parameters
    ----------
    path : str
        File to read.

    Returns
    -------
    str
        32 lowercase hex characters, most significant byte first.

    Raises
    ------
    OSError
        If the file cannot be opened or read.
    """
    hasher = xxhash.xxh3_128()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b''):
            hasher.update(chunk)
    return hasher.hexdigest()


def stat_file(path: str) -> Optional[Tuple[int, int]]:
    """Return ``(mtime_ms, size)`` for a regular file, or None."""
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return None
    if not stat.S_ISREG(st.st_mode):
        return None
    return st.st_mtime_ns // 1_000_000, st.st_size


def reverse_hex_bytes(hex_str: str) -> str:
    """Reverse a hex string one byte (two characters) at a time.

    Pairs are taken from the end, so an odd leading nibble ends up
    last.
    """
    chunks = []
    end = len(hex_str)
    while end > 0:
        start = max(end - 2, 0)
        chunks.append(hex_str[start:end])
        end = start
    return ''.join(chunks)


def hashes_match(found: str, expected: str) -> bool:
    """Compare a computed hash against a manifest hash.

    Catalog manifests were generated with both byte orders of the
    128-bit value, so ``expected`` matches if it equals ``found``
    either as written or byte-reversed. Case is ignored and empty
    values never match.

    Parameters
    ----------
    found : str
        Hash computed from the file on disk.
    expected : str
        Hash recorded in the catalog.

    Returns
    -------
    bool
    """
    if not found or not expected:
        return False
    found = found.lower()
    expected = expected.lower()
    return found == expected or found == reverse_hex_bytes(expected)


class HashCache:
    """Persistent memo of file fingerprints.

    Entries are stored as ``{"xxh3_128": hex, "mtimeMs": int,
    "size": int}`` keyed by the lowercased absolute path. An entry is
    reused only while the file's modification time and size are
    unchanged.

    Parameters
    ----------
    store_path : Path
        JSON file backing the cache.
    hasher : Callable[[str], str]
        Function that fingerprints a file. Default ``hash_file``.
    """

    def __init__(
        self,
        store_path: Path,
        hasher: Callable[[str], str] = hash_file,
    ) -> None:
        self._store_path = Path(store_path)
        self._hasher = hasher
        self._entries: Dict[str, dict] = {}
        self._touched: Set[str] = set()
        self.computed = 0

    @property
    def store_path(self) -> Path:
        return self._store_path

    @staticmethod
    def key_for(path: str) -> str:
        return os.path.abspath(path).lower()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: str) -> bool:
        return self.key_for(path) in self._entries

    def load(self) -> None:
        """Read the store, replacing in-memory entries.

        A missing store yields an empty cache. An unreadable or corrupt
        store is logged and also yields an empty cache.
        """
        self._entries = {}
        self._touched = set()
        if not self._store_path.exists():
            return
        try:
            with open(self._store_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(
                "Ignoring unreadable hash cache %s: %s", self._store_path, e
            )
            return
        if not isinstance(data, dict):
            logger.warning(
                "Ignoring malformed hash cache %s", self._store_path
            )
            return
        self._entries = {
            k: v for k, v in data.items() if isinstance(v, dict)
        }

    def save(self) -> None:
        """Write all entries back to the store.

        Failures are logged; a lost write only costs a rehash on the
        next pass.
        """
        try:
            self._store_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._store_path, 'w', encoding='utf-8') as f:
                json.dump(self._entries, f, indent=2)
        except OSError as e:
            logger.warning(
                "Failed to write hash cache %s: %s", self._store_path, e
            )

    def prune(self) -> int:
        """Drop entries whose file no longer exists.

        Keys are lowercased, so entries looked up during this pass are
        always kept; the rest are checked against the filesystem.

        Returns
        -------
        int
            Number of entries removed.
        """
        stale = [
            k for k in self._entries
            if k not in self._touched and not os.path.isfile(k)
        ]
        for k in stale:
            del self._entries[k]
        if stale:
            logger.info("Pruned %d stale hash cache entries", len(stale))
        return len(stale)

    def lookup(self, path: str) -> Optional[str]:
        """Return the cached hash if still valid, without hashing."""
        info = stat_file(path)
        if info is None:
            return None
        return self._valid_hash(self.key_for(path), info)

    def _valid_hash(self, key: str, info: Tuple[int, int]) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        hex_str = entry.get(_HASH_FIELD)
        if not isinstance(hex_str, str) or not hex_str:
            return None
        mtime_ms, size = info
        if entry.get(_MTIME_FIELD) != mtime_ms or entry.get(_SIZE_FIELD) != size:
            return None
        return hex_str

    def get_or_compute(self, path: str) -> Optional[str]:
        """Return the fingerprint of ``path``, hashing on a cache miss.

        Parameters
        ----------
        path : str
            Absolute path of the file.

        Returns
        -------
        Optional[str]
            The hex fingerprint, or None if the file does not exist or
            cannot be read.
        """
        info = stat_file(path)
        if info is None:
            return None

        key = self.key_for(path)
        self._touched.add(key)
        cached = self._valid_hash(key, info)
        if cached is not None:
            return cached

        try:
            hex_str = self._hasher(path)
        except OSError as e:
            logger.error("hash error path=\"%s\": %s", path, e)
            return None
        self.computed += 1

        mtime_ms, size = info
        self._entries[key] = {
            _HASH_FIELD: hex_str,
            _MTIME_FIELD: mtime_ms,
            _SIZE_FIELD: size,
        }
        return hex_str
