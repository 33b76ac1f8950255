"""Thread-safe memo of segmented words with pluggable eviction.

WHY: Rule mode re-segments remainders recursively, and running text
repeats the same words constantly. Memoizing (word, options) pairs makes
repeated words free. The cache is injected into the Hyphenator instead of
living in a module global, so tests and long-running services control its
lifetime and size.

HOW: An OrderedDict in insertion order, guarded by a threading.Lock. After
each insert the EvictionPolicy decides which keys to drop.

RULES:
- Keys are (joined word text, HyphenationOptions)
- Entries are never overwritten; the first stored value wins
- All reads and writes acquire self._lock
- NoEviction keeps everything; MaxEntries drops oldest-first
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Iterable, List, Optional, Tuple

from greek_hyphen.config import HyphenationOptions

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, HyphenationOptions]


class EvictionPolicy(ABC):
    """Decides which entries to drop after an insert."""

    @abstractmethod
    def select_victims(self, keys: Iterable[CacheKey], size: int) -> List[CacheKey]:
        """Return the keys to evict, given keys in insertion order."""


class NoEviction(EvictionPolicy):
    """Never evict. The cache grows for the lifetime of the process."""

    def select_victims(self, keys: Iterable[CacheKey], size: int) -> List[CacheKey]:
        return []


class MaxEntries(EvictionPolicy):
    """Keep at most `limit` entries, evicting the oldest first."""

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError("MaxEntries limit must be at least 1, got {}".format(limit))
        self.limit = limit

    def select_victims(self, keys: Iterable[CacheKey], size: int) -> List[CacheKey]:
        excess = size - self.limit
        if excess <= 0:
            return []
        victims: List[CacheKey] = []
        for key in keys:
            if len(victims) >= excess:
                break
            victims.append(key)
        return victims


class HyphenationCache:
    """Memo of segmented words shared across calls and threads.

    RULES:
    - get() returns None on a miss
    - put() keeps an existing entry and returns the stored value
    - hits and misses are counted for diagnostics
    """

    def __init__(self, policy: Optional[EvictionPolicy] = None) -> None:
        self._entries: "OrderedDict[CacheKey, str]" = OrderedDict()
        self._lock = threading.Lock()
        self.policy = policy if policy is not None else NoEviction()
        self.hits = 0
        self.misses = 0

    def get(self, word: str, options: HyphenationOptions) -> Optional[str]:
        with self._lock:
            value = self._entries.get((word, options))
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, word: str, options: HyphenationOptions, value: str) -> str:
        """Store value unless the key is already present.

        Two threads may compute the same word concurrently; the loser's
        value is discarded and the stored one returned.
        """
        key = (word, options)
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = value
            victims = self.policy.select_victims(self._entries.keys(), len(self._entries))
            for victim in victims:
                del self._entries[victim]
        if victims:
            logger.debug("Evicted %d cache entries", len(victims))
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
