"""Per-keyword result cache for the autocomplete session."""

from collections import OrderedDict
from typing import Any, Hashable


class ResultCache:
    """Least-recently-used cache of query results.

    Entries are only valid for one collection and one set of options; the
    owner clears the cache whenever either changes.
    """

    def __init__(self, max_entries: int = 128):
        if max_entries < 0:
            raise ValueError(f"max_entries must be >= 0, got {max_entries}")
        self.max_entries = max_entries
        self._entries: OrderedDict[Hashable, list[Any]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable) -> list[Any] | None:
        """Return a copy of the cached results, or None on a miss."""
        if key not in self._entries:
            self.misses += 1
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        return list(self._entries[key])

    def put(self, key: Hashable, results: list[Any]) -> None:
        if self.max_entries == 0:
            return
        self._entries[key] = list(results)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()
