# -*- coding: utf-8 -*-
"""
Tests for aucatalog.catalog.index - CatalogIndex search and sort.

Created
-------
2026-10-18
"""

import threading
import time

import pytest

from aucatalog.catalog.index import (
    CatalogIndex, CatalogIndexError, ReadWriteLock, parse_updated_at,
)
from aucatalog.catalog.models import CatalogItem, VersionEntry
from aucatalog.core.config import CatalogConfig


DAY_MS = 86_400_000


def _entry(item_id, name="", author="", summary="", type="", tags=(), date=None):
    versions = [{"version": "1", "release_date": date}] if date is not None else []
    return {
        "id": item_id, "name": name, "author": author, "summary": summary,
        "type": type, "tags": list(tags), "versions": versions,
    }


@pytest.fixture
def index():
    idx = CatalogIndex(lock_timeout=0.5)
    idx.set_index([
        _entry("blur", name="Blur", author="KEN", summary="Gaussian blur",
               type="filter", tags=["effect"], date="2024-03-01"),
        _entry("kana", name="ぶらー", author="ＳＡＴＯ", summary="ぼかし",
               type="script", tags=["effect", "jp"], date="2024/01/15"),
        _entry("glow", name="Glow", author="ken", summary="Soft glow",
               type="filter", tags=["light"]),
        _entry("text", name="Text Tools", author="Mio", summary="テキスト 補助",
               type="script", date="2023-12-31"),
    ])
    return idx


class TestSetIndex:
    def test_returns_count_and_drops_empty_ids(self):
        idx = CatalogIndex()
        assert idx.set_index([_entry("a"), _entry(""), {"name": "x"}]) == 1
        assert len(idx) == 1

    def test_wholesale_replace(self, index):
        assert index.set_index([_entry("only")]) == 1
        assert index.query() == ["only"]

    def test_from_config(self):
        idx = CatalogIndex.from_config(CatalogConfig(index_lock_timeout=0.25))
        assert idx._lock_timeout == 0.25

    def test_non_mapping_entries_skipped(self):
        idx = CatalogIndex()
        assert idx.set_index([None, "junk", _entry("a")]) == 1
        assert idx.query() == ["a"]

    def test_accepts_catalog_items(self):
        idx = CatalogIndex()
        assert idx.set_index([CatalogItem(id="a", name="A")]) == 1

    def test_lock_unavailable(self, index):
        index._lock.acquire_read()
        try:
            with pytest.raises(CatalogIndexError):
                index.set_index([_entry("x")])
        finally:
            index._lock.release_read()
        assert len(index) == 4


class TestTextFilter:
    def test_empty_query_matches_all(self, index):
        assert sorted(index.query()) == ["blur", "glow", "kana", "text"]
        assert sorted(index.query(text="   ")) == ["blur", "glow", "kana", "text"]

    def test_katakana_query_matches_hiragana_name(self, index):
        assert index.query(text="ブラー") == ["kana"]

    def test_fullwidth_query(self, index):
        assert index.query(text="ＢＬＵＲ") == ["blur"]

    def test_matches_author_and_summary(self, index):
        assert sorted(index.query(text="ken")) == ["blur", "glow"]
        assert index.query(text="sato") == ["kana"]
        assert index.query(text="soft") == ["glow"]

    def test_all_terms_required(self, index):
        assert index.query(text="ken gaussian") == ["blur"]
        assert index.query(text="ken nothing") == []

    def test_terms_may_hit_different_fields(self, index):
        assert index.query(text="mio 補助") == ["text"]


class TestTagAndTypeFilters:
    def test_tags_any(self, index):
        assert sorted(index.query(tags=["jp", "light"])) == ["glow", "kana"]

    def test_types_any(self, index):
        assert sorted(index.query(types=["script"])) == ["kana", "text"]

    def test_combined(self, index):
        assert index.query(text="ken", tags=["effect"], types=["filter"]) == ["blur"]

    def test_empty_filters_match_all(self, index):
        assert len(index.query(tags=[], types=[])) == 4


class TestSort:
    def test_name_default_ascending(self, index):
        assert index.query(sort="name") == ["blur", "glow", "text", "kana"]

    def test_name_descending(self, index):
        assert index.query(sort="name", dir="desc") == ["kana", "text", "glow", "blur"]

    def test_newest_default_descending(self, index):
        assert index.query() == ["blur", "kana", "text", "glow"]

    def test_newest_ascending(self, index):
        assert index.query(sort="newest", dir="asc") == ["glow", "text", "kana", "blur"]

    def test_dated_before_undated_when_descending(self):
        idx = CatalogIndex()
        idx.set_index([_entry("undated", name="a"), _entry("dated", name="b", date="1970-01-02")])
        assert idx.query(sort="newest", dir="desc") == ["dated", "undated"]

    def test_unknown_sort_key_sorts_by_date(self, index):
        assert index.query(sort="popular") == index.query(sort="newest")

    def test_ties_fall_back_to_name(self):
        idx = CatalogIndex()
        idx.set_index([
            _entry("z", name="zeta", date="2024-01-01"),
            _entry("a", name="alpha", date="2024-01-01"),
            _entry("n2", name="nu"),
            _entry("n1", name="mu"),
        ])
        assert idx.query(dir="asc") == ["n1", "n2", "a", "z"]


class TestQueryLock:
    def test_query_returns_empty_while_writer_holds_lock(self, index):
        index._lock.acquire_write()
        try:
            assert index.query() == []
        finally:
            index._lock.release_write()
        assert len(index.query()) == 4

    def test_concurrent_readers(self, index):
        results = []

        def worker():
            results.append(index.query(text="ken"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)
        assert len(results) == 8
        assert all(sorted(r) == ["blur", "glow"] for r in results)


class TestReadWriteLock:
    def test_readers_share(self):
        lock = ReadWriteLock()
        assert lock.acquire_read(0.1)
        assert lock.acquire_read(0.1)
        assert not lock.acquire_write(0.05)
        lock.release_read()
        lock.release_read()
        assert lock.acquire_write(0.1)
        assert not lock.acquire_read(0.05)
        lock.release_write()

    def test_waiting_writer_blocks_new_readers(self):
        lock = ReadWriteLock()
        assert lock.acquire_read(0.1)
        acquired = []
        queued = threading.Event()

        def writer():
            queued.set()
            acquired.append(lock.acquire_write(5))
            lock.release_write()

        t = threading.Thread(target=writer)
        t.start()
        queued.wait(1)
        for _ in range(100):
            if lock._writers_waiting:
                break
            time.sleep(0.01)
        assert lock._writers_waiting == 1
        assert not lock.acquire_read(0.05)
        lock.release_read()
        t.join(timeout=5)
        assert acquired == [True]
        assert lock.acquire_read(0.1)
        lock.release_read()

    def test_timed_out_writer_releases_readers(self):
        lock = ReadWriteLock()
        assert lock.acquire_read(0.1)
        assert not lock.acquire_write(0.05)
        assert lock._writers_waiting == 0
        assert lock.acquire_read(0.1)
        lock.release_read()
        lock.release_read()


class TestParseUpdatedAt:
    def _item(self, *dates):
        return CatalogItem(id="x", versions=[VersionEntry("v", release_date=d) for d in dates])

    def test_hyphen_and_slash(self):
        assert parse_updated_at(self._item("1970-01-02")) == DAY_MS
        assert parse_updated_at(self._item("1970/01/02")) == DAY_MS

    def test_uses_last_version(self):
        assert parse_updated_at(self._item("1970-01-02", "1970-01-03")) == 2 * DAY_MS

    def test_permissive_numbers(self):
        assert parse_updated_at(self._item("1970-1-2")) == DAY_MS

    @pytest.mark.parametrize("date", ["", "2024-01", "2024-13-01", "2024-02-30", "abcd-01-01", "2024-01-02T00:00"])
    def test_invalid(self, date):
        assert parse_updated_at(self._item(date)) is None

    def test_no_versions(self):
        assert parse_updated_at(CatalogItem(id="x")) is None
