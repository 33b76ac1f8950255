"""Unit tests for the hyphenation cache and eviction policies.

HOW: Tests are organized by concern:
  - TestCacheBasics: get/put/contains/clear and hit counters
  - TestEviction: NoEviction and MaxEntries
  - TestThreadSafety: concurrent puts don't corrupt state
"""

from __future__ import annotations

import threading

import pytest

from greek_hyphen.config import HyphenationOptions
from greek_hyphen.core.cache import HyphenationCache, MaxEntries, NoEviction

OPTS = HyphenationOptions(separator="-")


class TestCacheBasics:
    """HyphenationCache stores the first value per (word, options)."""

    def test_miss_returns_none(self):
        cache = HyphenationCache()
        assert cache.get("λέξη", OPTS) is None
        assert cache.misses == 1

    def test_put_then_get(self):
        cache = HyphenationCache()
        cache.put("λέξη", OPTS, "λέ-ξη")
        assert cache.get("λέξη", OPTS) == "λέ-ξη"
        assert cache.hits == 1

    def test_put_does_not_overwrite(self):
        cache = HyphenationCache()
        cache.put("λέξη", OPTS, "λέ-ξη")
        assert cache.put("λέξη", OPTS, "other") == "λέ-ξη"
        assert cache.get("λέξη", OPTS) == "λέ-ξη"

    def test_options_are_part_of_key(self):
        cache = HyphenationCache()
        cache.put("λέξη", OPTS, "λέ-ξη")
        assert cache.get("λέξη", HyphenationOptions(separator="|")) is None
        assert cache.get("λέξη", HyphenationOptions(separator="-")) == "λέ-ξη"

    def test_len_and_contains(self):
        cache = HyphenationCache()
        cache.put("α", OPTS, "α")
        cache.put("β", OPTS, "β")
        assert len(cache) == 2
        assert ("α", OPTS) in cache
        assert ("γ", OPTS) not in cache

    def test_clear(self):
        cache = HyphenationCache()
        cache.put("α", OPTS, "α")
        cache.get("α", OPTS)
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0

    def test_empty_string_value_is_stored(self):
        cache = HyphenationCache()
        cache.put("", OPTS, "")
        assert ("", OPTS) in cache


class TestEviction:
    """Eviction policies decide which entries leave the cache."""

    def test_default_policy_never_evicts(self):
        cache = HyphenationCache()
        assert isinstance(cache.policy, NoEviction)
        for i in range(500):
            cache.put("w{}".format(i), OPTS, "x")
        assert len(cache) == 500

    def test_max_entries_evicts_oldest(self):
        cache = HyphenationCache(MaxEntries(2))
        cache.put("a", OPTS, "a")
        cache.put("b", OPTS, "b")
        cache.put("c", OPTS, "c")
        assert len(cache) == 2
        assert ("a", OPTS) not in cache
        assert ("b", OPTS) in cache
        assert ("c", OPTS) in cache

    def test_max_entries_rejects_zero(self):
        with pytest.raises(ValueError):
            MaxEntries(0)


class TestThreadSafety:
    """Concurrent access doesn't lose or corrupt entries."""

    def test_concurrent_puts(self):
        cache = HyphenationCache()
        per_thread = 200

        def worker(n):
            for i in range(per_thread):
                cache.put("t{}-{}".format(n, i), OPTS, "v")
                cache.get("t{}-{}".format(n, i), OPTS)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 8 * per_thread
        assert cache.hits == 8 * per_thread

    def test_concurrent_puts_same_key_keep_one_value(self):
        cache = HyphenationCache()
        results = []

        def worker(value):
            results.append(cache.put("λέξη", OPTS, value))

        threads = [threading.Thread(target=worker, args=(str(n),)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(results)) == 1
        assert len(cache) == 1
