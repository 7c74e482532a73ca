# -*- coding: utf-8 -*-
"""
Catalog Module - Installed-state detection and search for the catalog.

Determines which catalog packages are installed, and at which version,
by fingerprinting files on disk against per-version manifests, and
provides a normalized search index over catalog metadata.

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
