"""Tests for the in-process symbol search cache."""

from __future__ import annotations

from stockleague.cache import (
    SymbolSearchCache,
    create_symbol_search_cache,
    normalize_symbol_search_keyword,
)
from stockleague.domain import SymbolSearchMatch


def _match(symbol: str, name: str) -> list[SymbolSearchMatch]:
    return [SymbolSearchMatch(symbol=symbol, name=name)]


class TestNormalizeKeyword:
    """Tests for cache key normalization."""

    def test_trims_and_lowercases(self):
        assert normalize_symbol_search_keyword("  AApL ") == "aapl"

    def test_whitespace_only_is_empty(self):
        assert normalize_symbol_search_keyword("   ") == ""


class TestSymbolSearchCache:
    """Tests for get/set, expiry and eviction."""

    def test_stores_and_retrieves_within_ttl(self, clock, sample_matches):
        cache = create_symbol_search_cache(ttl_seconds=1, clock=clock)

        cache.set("AAPL", sample_matches)

        assert cache.get("aapl") == sample_matches
        assert cache.size() == 1

    def test_expires_after_ttl(self, clock):
        cache = create_symbol_search_cache(ttl_seconds=1, clock=clock)
        cache.set("MSFT", _match("MSFT", "Microsoft Corp."))

        clock.advance(1.001)

        assert cache.get("MSFT") is None
        assert cache.size() == 0

    def test_entry_expires_exactly_at_deadline(self, clock):
        cache = create_symbol_search_cache(ttl_seconds=10, clock=clock)
        cache.set("MSFT", _match("MSFT", "Microsoft Corp."))

        clock.advance(10)

        assert cache.get("MSFT") is None

    def test_evicts_least_recently_used(self, clock):
        """Reading AAPL makes MSFT the eviction candidate."""
        cache = create_symbol_search_cache(ttl_seconds=5, max_entries=2, clock=clock)
        aapl = _match("AAPL", "Apple Inc.")
        msft = _match("MSFT", "Microsoft Corp.")
        goog = _match("GOOG", "Alphabet Inc.")

        cache.set("AAPL", aapl)
        cache.set("MSFT", msft)
        assert cache.get("AAPL") == aapl

        cache.set("GOOG", goog)

        assert cache.get("MSFT") is None
        assert cache.get("AAPL") == aapl
        assert cache.get("GOOG") == goog

    def test_without_reads_oldest_insert_is_evicted(self, clock):
        cache = create_symbol_search_cache(max_entries=2, clock=clock)

        cache.set("a", _match("A", "Agilent"))
        cache.set("b", _match("B", "Barnes"))
        cache.set("c", _match("C", "Citigroup"))

        assert cache.get("a") is None
        assert cache.size() == 2

    def test_set_refreshes_existing_key(self, clock):
        cache = create_symbol_search_cache(ttl_seconds=10, max_entries=2, clock=clock)
        cache.set("a", _match("A", "Agilent"))
        cache.set("b", _match("B", "Barnes"))

        clock.advance(8)
        cache.set("A", _match("A", "Agilent Technologies"))
        cache.set("c", _match("C", "Citigroup"))
        clock.advance(5)

        assert cache.get("b") is None
        assert cache.get("a")[0].name == "Agilent Technologies"

    def test_returned_lists_are_copies(self, clock, sample_matches):
        cache = create_symbol_search_cache(clock=clock)
        cache.set("apple", sample_matches)

        sample_matches.clear()
        first = cache.get("apple")
        first[0].name = "Changed"
        first.pop()

        second = cache.get("apple")
        assert len(second) == 2
        assert second[0].name == "Apple Inc."

    def test_empty_keyword_ignored(self, clock, sample_matches):
        cache = create_symbol_search_cache(clock=clock)

        cache.set("   ", sample_matches)

        assert cache.size() == 0
        assert cache.get("") is None

    def test_zero_max_entries_disables_storage(self, clock, sample_matches):
        cache = create_symbol_search_cache(max_entries=0, clock=clock)

        cache.set("apple", sample_matches)

        assert cache.size() == 0
        assert cache.get("apple") is None

    def test_invalid_config_falls_back_to_defaults(self):
        cache = SymbolSearchCache(ttl_seconds=-5, max_entries=-1)

        assert cache.ttl_seconds == 300
        assert cache.max_entries == 50

    def test_lowered_capacity_evicts_one_entry_per_insert(self, clock):
        cache = create_symbol_search_cache(max_entries=5, clock=clock)
        for key in "abcd":
            cache.set(key, _match(key.upper(), key))

        cache.max_entries = 1
        cache.set("e", _match("E", "e"))

        assert cache.size() == 4
        assert cache.get("a") is None

    def test_clear(self, clock, sample_matches):
        cache = create_symbol_search_cache(clock=clock)
        cache.set("apple", sample_matches)
        cache.set("msft", sample_matches)

        cache.clear()

        assert len(cache) == 0

    def test_prune_expired(self, clock):
        cache = create_symbol_search_cache(ttl_seconds=10, clock=clock)
        cache.set("old", _match("OLD", "Old Co"))
        clock.advance(5)
        cache.set("new", _match("NEW", "New Co"))

        removed = cache.prune_expired(clock.now + 5)

        assert removed == 1
        assert cache.get("old") is None
        assert cache.get("new") is not None

    def test_prune_expired_defaults_to_clock(self, clock):
        cache = create_symbol_search_cache(ttl_seconds=10, clock=clock)
        cache.set("old", _match("OLD", "Old Co"))
        clock.advance(11)

        assert cache.prune_expired() == 1
        assert cache.size() == 0

    def test_instances_are_independent(self, clock, sample_matches):
        first = create_symbol_search_cache(clock=clock)
        second = create_symbol_search_cache(clock=clock)

        first.set("apple", sample_matches)

        assert second.get("apple") is None
