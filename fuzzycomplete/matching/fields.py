"""Apply the matcher across the configured fields of a record."""

from typing import Any

from .bitap import BitapMatcher
from .normalize import field_norm
from .options import SearchOptions
from .result import FieldMatch, MatchResult


class FieldScanner:
    """Scores records against one query.

    A record is as good as its best matching field. Each field score is
    raised to ``weight / max_weight`` (times the field-length norm when
    enabled), so heavier fields keep their score and lighter fields are
    pushed towards 1. A weighted score above the threshold is dropped like
    a field without a match.

    An exact hit scores 0 whatever the field weight, so exact matches on a
    light field and on the heaviest field tie and keep collection order.
    """

    def __init__(self, query: str, options: SearchOptions):
        self.options = options
        self.matcher = BitapMatcher(query, options)
        self._max_weight = options.max_weight

    def _exponent(self, weight: float, value: str) -> float:
        exponent = weight / self._max_weight
        if not self.options.ignore_field_norm:
            exponent *= field_norm(value)
        return exponent

    def scan_field(self, record: Any, key) -> list[FieldMatch]:
        """Match every value of ``key`` in ``record``; return the hits."""
        values = key.values(record)
        hits = []
        for position, value in enumerate(values):
            result = self.matcher.search_in(value)
            if not result.is_match:
                continue
            hits.append(
                FieldMatch(
                    key=key.name,
                    value=value,
                    score=result.score,
                    indices=result.indices,
                    ref_index=position if len(values) > 1 else None,
                )
            )
        return hits

    def scan(self, record: Any, ref_index: int) -> MatchResult | None:
        """Score one record, or return None when no field matches."""
        best: float | None = None
        matches: list[FieldMatch] = []
        for key in self.options.keys:
            for hit in self.scan_field(record, key):
                weighted = hit.score ** self._exponent(key.weight, hit.value)
                if weighted > self.options.threshold:
                    continue
                if best is None or weighted < best:
                    best = weighted
                matches.append(hit)

        if best is None:
            return None

        return MatchResult(
            record=record,
            score=best,
            ref_index=ref_index,
            matches=tuple(matches) if self.options.include_matches else (),
        )
