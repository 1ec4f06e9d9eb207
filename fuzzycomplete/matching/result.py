"""Result types produced by the matcher, the field scanner and the engine."""

from dataclasses import dataclass, field
from typing import Any

Span = tuple[int, int]


@dataclass(frozen=True)
class BitapResult:
    """Outcome of matching one pattern against one text.

    Attributes:
        is_match: Whether the text matched within the threshold.
        score: Normalized distance in [0, 1]; 1.0 when there is no match.
        indices: Inclusive ``(start, end)`` spans of matched characters.
            Only filled in when span tracking was requested.
    """

    is_match: bool
    score: float
    indices: tuple[Span, ...] = ()


@dataclass(frozen=True)
class FieldMatch:
    """One matched field value of a record.

    Attributes:
        key: Name of the configured key the value came from.
        value: The field value as it appears in the record.
        score: Score of this value before weighting.
        indices: Matched character spans in ``value``.
        ref_index: Position of the value inside a list-valued field,
            ``None`` for scalar fields.
    """

    key: str
    value: str
    score: float
    indices: tuple[Span, ...] = ()
    ref_index: int | None = None


@dataclass(frozen=True)
class MatchResult:
    """A record that matched a query.

    Attributes:
        record: The record object from the bound collection, unchanged.
        score: Combined record score in [0, 1]; 0 is a perfect match.
        ref_index: Position of the record in the bound collection.
        matches: Per-field detail, filled in only with ``include_matches``.
    """

    record: Any
    score: float
    ref_index: int
    matches: tuple[FieldMatch, ...] = field(default=(), compare=False)
