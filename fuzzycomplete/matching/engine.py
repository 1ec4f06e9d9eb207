"""Collection search engine: bind records and options, answer queries."""

import logging
import time
from typing import Any, Sequence

from .fields import FieldScanner
from .options import SearchOptions, check_limit
from .ranking import rank
from .result import MatchResult

logger = logging.getLogger(__name__)


class SearchEngine:
    """Fuzzy search over an in-memory record collection.

    The engine keeps nothing between queries except the bound collection
    and options, so the same query always gives the same answer and a
    rebinding takes effect on the next call.

    Callers must not mutate the bound collection while ``search`` runs.

    Example:
        >>> engine = SearchEngine([{"id": 0, "name": "value0"}])
        >>> [r.record["id"] for r in engine.search("valu")]
        [0]
    """

    def __init__(
        self,
        records: Sequence[Any] | None = None,
        options: SearchOptions | None = None,
    ):
        self._records: Sequence[Any] = []
        self._options = SearchOptions()
        self.configure(records or [], options)

    @property
    def records(self) -> Sequence[Any]:
        return self._records

    @property
    def options(self) -> SearchOptions:
        return self._options

    def configure(self, records: Sequence[Any], options: SearchOptions | None = None) -> None:
        """Bind a new collection and, optionally, new options.

        Options are validated before anything is replaced, so a bad
        configuration leaves the previous binding in place.
        """
        if options is not None and not isinstance(options, SearchOptions):
            options = SearchOptions.from_mapping(options)
        if options is not None:
            self._options = options
        self._records = records
        logger.debug("Bound %d records, keys=%s", len(records), [k.name for k in self._options.keys])

    def set_collection(self, records: Sequence[Any]) -> None:
        """Replace the collection, keeping the current options."""
        self.configure(records)

    def search(self, query: str | None, limit: int | None = None) -> list[MatchResult]:
        """Return records matching ``query``, best first.

        Args:
            query: Text to look for. Empty or None returns no results.
            limit: Maximum number of results. None means all.

        Returns:
            MatchResult list, at most ``limit`` long.
        """
        limit = check_limit(limit)
        if not query:
            return []

        records = self._records
        options = self._options
        started = time.perf_counter()

        scanner = FieldScanner(query, options)
        found = []
        for ref_index, record in enumerate(records):
            result = scanner.scan(record, ref_index)
            if result is not None:
                found.append(result)

        results = rank(found, should_sort=options.should_sort, limit=limit)
        logger.debug(
            "Query %r matched %d/%d records in %.2f ms",
            query,
            len(found),
            len(records),
            (time.perf_counter() - started) * 1000,
        )
        return results

    def search_records(self, query: str | None, limit: int | None = None) -> list[Any]:
        """Like ``search`` but return the bare records."""
        return [result.record for result in self.search(query, limit)]
