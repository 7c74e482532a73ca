# -*- coding: utf-8 -*-
"""
Log File Setup - Attach the application log file to the root logger.

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
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# aucatalog internal
from aucatalog.catalog.resolver import LOG_FILE, resolve_store_path

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


def prune_log_file(path: Path, max_lines: int) -> int:
    """Trim a log file to its last ``max_lines`` lines.

    Parameters
    ----------
    path : Path
        Log file. A missing or unreadable file is left alone.
    max_lines : int
        Number of trailing lines to keep.

    Returns
    -------
    int
        Number of lines dropped.
    """
    path = Path(path)
    if not path.exists():
        return 0
    try:
        lines = path.read_text(encoding='utf-8', errors='replace').splitlines()
    except OSError:
        return 0
    if len(lines) <= max_lines:
        return 0
    dropped = len(lines) - max_lines
    kept = lines[dropped:] if max_lines > 0 else []
    try:
        path.write_text(''.join(line + '\n' for line in kept), encoding='utf-8')
    except OSError as e:
        logger.warning("Failed to prune log file %s: %s", path, e)
        return 0
    return dropped


def configure_logging(
    log_path: Optional[Path] = None,
    max_lines: int = 1000,
    level: int = logging.INFO,
) -> logging.Handler:
    """Prune the log file and route the ``aucatalog`` loggers into it.

    Parameters
    ----------
    log_path : Optional[Path]
        Log file, created with its parent directory if needed. Defaults
        to ``logs/app.log`` in the resolved configuration directory.
    max_lines : int
        Lines kept from the previous runs. Default 1000.
    level : int
        Level for the ``aucatalog`` logger. Default INFO.

    Returns
    -------
    logging.Handler
        The attached file handler.
    """
    log_path = Path(log_path) if log_path else resolve_store_path(LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    prune_log_file(log_path, max_lines)

    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger('aucatalog')
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
