# -*- coding: utf-8 -*-
"""
aucatalog - Plugin and script catalog tooling for AviUtl2.

Detects installed catalog packages from the filesystem alone and
searches catalog metadata with CJK-aware normalization.

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

__version__ = "0.1.0"


def detect_versions_map(items, config=None, cache_path=None):
    """Detect installed versions of catalog items.

    Re-exported from ``aucatalog.catalog.detector.detect_versions_map``.
    """
    from aucatalog.catalog.detector import detect_versions_map as _detect
    return _detect(items, config=config, cache_path=cache_path)


def hash_file(path):
    """Compute the xxh3-128 hex fingerprint of a file.

    Re-exported from ``aucatalog.catalog.hashing.hash_file``.
    """
    from aucatalog.catalog.hashing import hash_file as _hash_file
    return _hash_file(path)


__all__: list = ["detect_versions_map", "hash_file"]
