"""Result cache for queries marked cacheable."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]


class QueryCache:
    """Thread-safe LRU of query results grouped by table.

    Entries are invalidated per table by the DAO that owns the cache; writes
    made outside that DAO are not observed.
    """

    def __init__(self, max_entries: int = 128):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1.")
        self._max_entries = max_entries
        self._entries: OrderedDict[CacheKey, List[Any]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, table: str, sql: str) -> Optional[List[Any]]:
        """Return a copy of the cached results, or None on a miss."""

        key = (table, sql)
        with self._lock:
            results = self._entries.get(key)
            if results is None:
                return None
            self._entries.move_to_end(key)
        logger.debug("Query cache hit for table %s", table)
        return list(results)

    def put(self, table: str, sql: str, results: List[Any]) -> None:
        key = (table, sql)
        with self._lock:
            self._entries[key] = list(results)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def invalidate(self, table: Optional[str] = None) -> None:
        """Drop entries of one table, or every entry when `table` is None."""

        with self._lock:
            if table is None:
                self._entries.clear()
            else:
                for key in [key for key in self._entries if key[0] == table]:
                    del self._entries[key]
        logger.debug("Query cache invalidated for table %s", table or "*")

    def clear(self) -> None:
        self.invalidate()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
