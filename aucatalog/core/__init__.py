# -*- coding: utf-8 -*-
"""
Core Module - Configuration, logging and text helpers for aucatalog.

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
