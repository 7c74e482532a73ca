# -*- coding: utf-8 -*-
"""
Path Templates - Expand ``{placeholder}`` tokens in catalog file paths.

Catalog manifests describe file locations relative to the host's
directory roots, e.g. ``{pluginsDir}/foo.auf``. This module
substitutes the configured roots, the item id and the version label into
those templates and normalizes separators so expanded paths can be
compared and stat'd.

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
import os
import re
from typing import Dict, List, Mapping, Optional

# aucatalog internal
from aucatalog.core.config import AppDirs


APP_DIR = "appDir"
DATA_DIR = "dataDir"
PLUGINS_DIR = "pluginsDir"
SCRIPTS_DIR = "scriptsDir"
ITEM_ID = "id"
VERSION = "version"

_PLACEHOLDER_RE = re.compile(r"\{[A-Za-z_][A-Za-z0-9_]*\}")


def token(name: str) -> str:
    """Return the template token for a placeholder name."""
    return "{" + name + "}"


def expand(template: str, context: Mapping[str, str]) -> str:
    """Substitute placeholders in a path template.

    Each ``{name}`` with an entry in ``context`` is replaced literally.
    Placeholders with no entry are left intact.

    Parameters
    ----------
    template : str
        Path template.
    context : Mapping[str, str]
        Placeholder name to replacement string.

    Returns
    -------
    str
    """
    out = template
    for name, value in context.items():
        out = out.replace(token(name), value)
    return out


def normalize_separators(path: str) -> str:
    """Rewrite both ``/`` and ``\\`` to the platform separator."""
    return path.replace('\\', os.sep).replace('/', os.sep)


def expand_path(template: str, context: Mapping[str, str]) -> str:
    """Expand a template and normalize its separators."""
    return normalize_separators(expand(template, context))


def has_placeholder(path: str) -> bool:
    """Whether ``path`` still contains an unexpanded ``{name}`` token."""
    return _PLACEHOLDER_RE.search(path) is not None


def segments_after(template: str, name: str) -> Optional[List[str]]:
    """Split the part of a template that follows a placeholder.

    Parameters
    ----------
    template : str
        Path template.
    name : str
        Placeholder name, e.g. ``PLUGINS_DIR``.

    Returns
    -------
    Optional[List[str]]
        Non-empty path segments after the first occurrence of the
        placeholder, or None if the template does not contain it.
    """
    marker = token(name)
    pos = template.find(marker)
    if pos < 0:
        return None
    rest = template[pos + len(marker):].replace('\\', '/')
    return [seg for seg in rest.split('/') if seg]


def build_context(dirs: AppDirs) -> Dict[str, str]:
    """Build the placeholder context for a set of directory roots.

    Roots that are empty are left out so that templates referring to
    them stay unexpanded.

    Parameters
    ----------
    dirs : AppDirs

    Returns
    -------
    Dict[str, str]
    """
    candidates = {
        APP_DIR: dirs.app_dir,
        DATA_DIR: dirs.data_dir,
        PLUGINS_DIR: dirs.plugins_dir,
        SCRIPTS_DIR: dirs.scripts_dir,
    }
    return {name: value for name, value in candidates.items() if value}


def item_context(
    context: Mapping[str, str],
    item_id: str,
    version: str,
) -> Dict[str, str]:
    """Extend a root context with ``{id}`` and ``{version}`` for one item.

    Parameters
    ----------
    context : Mapping[str, str]
        Root placeholder context, possibly empty.
    item_id : str
        Catalog item id.
    version : str
        Version label being checked.

    Returns
    -------
    Dict[str, str]
    """
    out = dict(context)
    out[ITEM_ID] = item_id
    out[VERSION] = version
    return out
