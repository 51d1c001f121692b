"""Tests for the bounded search history store."""

import pytest

from geosearch_analyst.modules.search_history import SearchHistoryStore


class TestSearchHistoryStore:

    def test_newest_first(self, test_db):
        store = SearchHistoryStore()
        store.record("seo tools", "London", timestamp=1000)
        store.record("rank tracker", "Paris", timestamp=2000)
        assert [item.keywords for item in store.list_recent()] == ["rank tracker", "seo tools"]

    def test_duplicate_moves_to_front(self, test_db):
        store = SearchHistoryStore()
        store.record("seo tools", "London", timestamp=1000)
        store.record("rank tracker", "Paris", timestamp=2000)
        store.record("seo tools", "London", timestamp=3000)
        items = store.list_recent()
        assert [item.keywords for item in items] == ["seo tools", "rank tracker"]
        assert items[0].timestamp == 3000

    def test_website_is_part_of_identity(self, test_db):
        store = SearchHistoryStore()
        store.record("seo tools", "London", timestamp=1000)
        store.record("seo tools", "London", "example.com", timestamp=2000)
        items = store.list_recent()
        assert len(items) == 2
        assert items[0].website == "example.com"
        assert items[1].website is None

    def test_capped_at_max_items(self, test_db):
        store = SearchHistoryStore(max_items=6)
        for i in range(8):
            store.record("kw " + str(i), "London", timestamp=1000 + i)
        items = store.list_recent()
        assert len(items) == 6
        assert items[0].keywords == "kw 7"
        assert items[-1].keywords == "kw 2"

    def test_clear(self, test_db):
        store = SearchHistoryStore()
        store.record("a", "London", timestamp=1)
        store.record("b", "London", timestamp=2)
        assert store.clear() == 2
        assert store.list_recent() == []

    def test_to_dict_omits_missing_website(self, test_db):
        item = SearchHistoryStore().record("a", "London", timestamp=5)
        assert item.to_dict() == {"keywords": "a", "location": "London", "timestamp": 5}

    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError):
            SearchHistoryStore(max_items=0)
