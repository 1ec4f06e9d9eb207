"""Ordering and truncation of match results."""

from typing import Iterable

from .options import check_limit
from .result import MatchResult


def rank(
    results: Iterable[MatchResult],
    should_sort: bool = True,
    limit: int | None = None,
) -> list[MatchResult]:
    """Order results and keep the first ``limit``.

    Sorting is by ascending score. Python's sort is stable, and results
    arrive in collection order, so equal scores keep their input order.
    With ``should_sort`` off the emission order is kept as is.
    """
    limit = check_limit(limit)
    ordered = list(results)
    if should_sort:
        ordered.sort(key=lambda result: result.score)
    if limit is not None:
        ordered = ordered[:limit]
    return ordered
