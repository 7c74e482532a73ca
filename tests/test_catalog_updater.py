# -*- coding: utf-8 -*-
"""
Tests for aucatalog.catalog.updater - UpdateChecker.

Created
-------
2026-10-18
"""

import pytest

from aucatalog.catalog.models import CatalogItem, VersionEntry
from aucatalog.catalog.updater import UpdateChecker, latest_version_of


def _make_item(item_id="blur", labels=("1.0.0", "2.0.0")):
    return CatalogItem(id=item_id, versions=[VersionEntry(v) for v in labels])


@pytest.fixture
def checker():
    return UpdateChecker([], {})


# ---------------------------------------------------------------------------
# latest_version_of
# ---------------------------------------------------------------------------

class TestLatestVersionOf:
    def test_last_entry(self):
        assert latest_version_of(_make_item()) == "2.0.0"

    def test_payload_mapping(self):
        assert latest_version_of({"id": "x", "version": [{"version": "r3"}]}) == "r3"

    def test_no_versions(self):
        assert latest_version_of(CatalogItem(id="x")) == ""


# ---------------------------------------------------------------------------
# _is_newer
# ---------------------------------------------------------------------------

class TestIsNewer:
    def test_newer(self, checker):
        assert checker._is_newer("1.0.0", "2.0.0") is True

    def test_same(self, checker):
        assert checker._is_newer("1.0.0", "1.0.0") is False

    def test_older(self, checker):
        assert checker._is_newer("2.0.0", "1.0.0") is False

    def test_unparsable_labels_differ(self, checker):
        assert checker._is_newer("r1", "r2") is True

    def test_unknown_installed(self, checker):
        assert checker._is_newer("???", "1.0.0") is True

    def test_no_latest(self, checker):
        assert checker._is_newer("1.0.0", "") is False


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

class TestRun:
    def test_run_with_update(self):
        results = UpdateChecker([_make_item()], {"blur": "1.0.0"}).run()
        assert len(results) == 1
        r = results[0]
        assert r.update_available is True
        assert r.installed is True
        assert r.is_latest is False
        assert r.latest_version == "2.0.0"

    def test_run_up_to_date(self):
        r = UpdateChecker([_make_item()], {"blur": "2.0.0"}).run()[0]
        assert r.update_available is False
        assert r.is_latest is True

    def test_run_not_installed(self):
        r = UpdateChecker([_make_item()], {}).run()[0]
        assert r.installed is False
        assert r.update_available is False

    def test_run_unknown_version(self):
        r = UpdateChecker([_make_item()], {"blur": "???"}).run()[0]
        assert r.installed is True
        assert r.update_available is True

    def test_run_empty_catalog(self):
        assert UpdateChecker([], {"x": "1"}).run() == []
