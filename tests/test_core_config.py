# -*- coding: utf-8 -*-
"""
Tests for aucatalog.core.config - CatalogConfig and load_config.

Created
-------
2026-10-18
"""

import json
import os
from pathlib import Path

import pytest

from aucatalog.core.config import AppDirs, CatalogConfig, load_config


class TestCatalogConfig:
    def test_defaults(self):
        cfg = CatalogConfig()
        assert cfg.app_root == ""
        assert cfg.is_portable_mode is False
        assert cfg.host_executable == "aviutl2.exe"
        assert cfg.index_lock_timeout == 5.0
        assert cfg.prune_hash_cache is False
        assert cfg.log_max_lines == 1000
        assert cfg.max_workers == 2

    def test_custom_values(self):
        cfg = CatalogConfig(app_root="/opt/aviutl2", max_workers=8)
        assert cfg.app_root == "/opt/aviutl2"
        assert cfg.max_workers == 8

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "settings.json"
        cfg = CatalogConfig(app_root="/opt/aviutl2", is_portable_mode=True)
        cfg.save(path)

        loaded = load_config(path)
        assert loaded.app_root == "/opt/aviutl2"
        assert loaded.is_portable_mode is True
        # Other fields should be default
        assert loaded.host_executable == "aviutl2.exe"

    def test_load_missing_file_returns_defaults(self, tmp_path):
        path = tmp_path / "nonexistent.json"
        cfg = load_config(path)
        assert cfg == CatalogConfig()

    def test_load_corrupted_file_returns_defaults(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not json {{{")
        cfg = load_config(path)
        assert cfg == CatalogConfig()

    def test_load_non_object_returns_defaults(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        assert load_config(path) == CatalogConfig()

    def test_load_ignores_unknown_fields(self, tmp_path):
        path = tmp_path / "settings.json"
        data = {"app_root": "/x", "theme": "dark"}
        with open(path, 'w') as f:
            json.dump(data, f)
        cfg = load_config(path)
        assert cfg.app_root == "/x"


class TestDirs:
    def test_unconfigured(self):
        assert CatalogConfig().dirs() == AppDirs()

    def test_portable_mode(self, tmp_path):
        root = str(tmp_path / "aviutl2")
        dirs = CatalogConfig(app_root=root, is_portable_mode=True).dirs()
        assert dirs.app_dir == root
        assert dirs.data_dir == os.path.join(root, "data")
        assert dirs.plugins_dir == os.path.join(root, "data", "Plugin")
        assert dirs.scripts_dir == os.path.join(root, "data", "Script")

    def test_installed_mode_uses_programdata(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PROGRAMDATA", str(tmp_path / "pd"))
        dirs = CatalogConfig(app_root=str(tmp_path / "app")).dirs()
        assert dirs.data_dir == os.path.join(str(tmp_path / "pd"), "aviutl2")
        assert dirs.plugins_dir == os.path.join(dirs.data_dir, "Plugin")

    def test_explicit_dirs_override(self, tmp_path):
        cfg = CatalogConfig(
            app_root=str(tmp_path),
            is_portable_mode=True,
            plugins_dir="/elsewhere/plugins",
        )
        dirs = cfg.dirs()
        assert dirs.plugins_dir == "/elsewhere/plugins"
        assert dirs.scripts_dir == os.path.join(str(tmp_path), "data", "Script")

    def test_explicit_dirs_without_root(self):
        dirs = CatalogConfig(scripts_dir="/s").dirs()
        assert dirs.app_dir == ""
        assert dirs.plugins_dir == ""
        assert dirs.scripts_dir == "/s"
