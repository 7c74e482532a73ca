# -*- coding: utf-8 -*-
"""
Tests for aucatalog.core.logs - log file pruning and setup.

Created
-------
2026-10-18
"""

import logging
import os
from unittest import mock

import pytest

from aucatalog.core.logs import configure_logging, prune_log_file


class TestPruneLogFile:
    def test_missing_file(self, tmp_path):
        assert prune_log_file(tmp_path / "app.log", 10) == 0

    def test_short_file_untouched(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("a\nb\n")
        assert prune_log_file(path, 10) == 0
        assert path.read_text() == "a\nb\n"

    def test_keeps_tail(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("".join(f"line{i}\n" for i in range(10)))
        assert prune_log_file(path, 3) == 7
        assert path.read_text() == "line7\nline8\nline9\n"


class TestConfigureLogging:
    def test_writes_formatted_lines(self, tmp_path):
        path = tmp_path / "logs" / "app.log"
        handler = configure_logging(path, max_lines=100)
        try:
            logging.getLogger("aucatalog.test").info("hello %s", "world")
            handler.flush()
        finally:
            logging.getLogger("aucatalog").removeHandler(handler)
            handler.close()
        text = path.read_text(encoding="utf-8")
        assert "[INFO] hello world" in text
        assert text.startswith("[")

    def test_prunes_before_attaching(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("".join(f"old{i}\n" for i in range(50)))
        handler = configure_logging(path, max_lines=5)
        logging.getLogger("aucatalog").removeHandler(handler)
        handler.close()
        assert path.read_text().splitlines() == [f"old{i}" for i in range(45, 50)]

    def test_default_path_in_config_dir(self, tmp_path):
        with mock.patch.dict(os.environ, {'AUCATALOG_CONFIG_DIR': str(tmp_path)}):
            handler = configure_logging()
        try:
            logging.getLogger("aucatalog.test").warning("defaulted")
            handler.flush()
        finally:
            logging.getLogger("aucatalog").removeHandler(handler)
            handler.close()
        path = tmp_path / "logs" / "app.log"
        assert "[WARNING] defaulted" in path.read_text(encoding="utf-8")
