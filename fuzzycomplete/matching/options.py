"""Search options and field keys.

Options are immutable once built and validated in ``__post_init__`` so an
out-of-range value fails when the engine is configured, not halfway through
a scan.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Iterable, Iterator

from .errors import InvalidOptionError

Record = Mapping[str, Any]
Getter = Callable[[Any], Any]


def _walk(value: Any, parts: list[str]) -> Iterator[Any]:
    if value is None:
        return
    if not parts:
        yield value
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            yield from _walk(item, parts)
    elif isinstance(value, Mapping):
        yield from _walk(value.get(parts[0]), parts[1:])


def _flatten(value: Any) -> Iterator[str]:
    if value is None:
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            yield from _flatten(item)
    else:
        yield value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class FieldKey:
    """A searchable field.

    Attributes:
        name: Field name, or a dotted path into nested mappings
            (``"author.name"``).
        weight: Relative importance of the field. Must be positive.
        getter: Optional extractor used instead of the path lookup.
    """

    name: str
    weight: float = 1.0
    getter: Getter | None = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise InvalidOptionError("keys", self.name, "key name must be a non-empty string")
        if isinstance(self.weight, bool) or not isinstance(self.weight, (int, float)):
            raise InvalidOptionError(f"keys[{self.name}].weight", self.weight, "must be a number")
        if self.weight <= 0:
            raise InvalidOptionError(f"keys[{self.name}].weight", self.weight, "must be > 0")

    @property
    def path(self) -> list[str]:
        return self.name.split(".")

    def values(self, record: Any) -> list[str]:
        """Return the non-blank string values of this field in ``record``."""
        if self.getter is not None:
            raw: Iterable[Any] = [self.getter(record)]
        else:
            raw = _walk(record, self.path)
        values = []
        for item in raw:
            values.extend(text for text in _flatten(item) if text.strip())
        return values


def as_field_key(key: Any) -> FieldKey:
    """Coerce a key (name, ``(name, weight)`` or mapping) to a FieldKey."""
    if isinstance(key, FieldKey):
        return key
    if isinstance(key, str):
        return FieldKey(key)
    if isinstance(key, Mapping):
        unknown = set(key) - {"name", "weight", "getter"}
        if unknown:
            raise InvalidOptionError("keys", dict(key), f"unknown key fields {sorted(unknown)}")
        if "name" not in key:
            raise InvalidOptionError("keys", dict(key), "missing 'name'")
        return FieldKey(key["name"], key.get("weight", 1.0), key.get("getter"))
    if isinstance(key, tuple) and len(key) == 2:
        return FieldKey(key[0], key[1])
    raise InvalidOptionError("keys", key, "expected a name, (name, weight) or mapping")


# camelCase names accepted in config files, so option blocks written for
# the JavaScript widget load unchanged.
_ALIASES = {
    "minMatchCharLength": "min_match_char_length",
    "shouldSort": "should_sort",
    "isCaseSensitive": "is_case_sensitive",
    "ignoreLocation": "ignore_location",
    "findAllMatches": "find_all_matches",
    "includeMatches": "include_matches",
    "ignoreFieldNorm": "ignore_field_norm",
}


@dataclass(frozen=True)
class SearchOptions:
    """Configuration for one bound collection.

    Attributes:
        keys: Fields to scan. Strings, ``(name, weight)`` pairs, mappings
            and FieldKey instances are all accepted and normalized to
            FieldKey.
        threshold: Maximum score (0.0 exact .. 1.0 anything) a field may
            have and still count as a match.
        location: Character offset where a match is expected to start.
        distance: How many characters of offset from ``location`` cost a
            full point of score. 0 makes any offset a total mismatch.
        min_match_char_length: Matched runs shorter than this are dropped.
        should_sort: Sort results by score; otherwise keep input order.
        is_case_sensitive: Compare without case folding.
        ignore_location: Score on errors only.
        find_all_matches: Keep scanning after a match at the anchor.
        include_matches: Attach matched character spans to results.
        ignore_field_norm: Skip the field-length norm when combining scores.
    """

    keys: tuple[FieldKey, ...] = ("name",)
    threshold: float = 0.6
    location: int = 0
    distance: int = 100
    min_match_char_length: int = 1
    should_sort: bool = True
    is_case_sensitive: bool = False
    ignore_location: bool = False
    find_all_matches: bool = False
    include_matches: bool = False
    ignore_field_norm: bool = True

    def __post_init__(self):
        keys = self.keys
        if isinstance(keys, (str, FieldKey, Mapping)):
            keys = [keys]
        keys = tuple(as_field_key(k) for k in keys)
        if not keys:
            raise InvalidOptionError("keys", self.keys, "at least one key is required")
        object.__setattr__(self, "keys", keys)

        self._check_number("threshold", self.threshold)
        if not 0.0 <= self.threshold <= 1.0:
            raise InvalidOptionError("threshold", self.threshold, "must be between 0.0 and 1.0")
        self._check_number("location", self.location)
        if self.location < 0:
            raise InvalidOptionError("location", self.location, "must be >= 0")
        self._check_number("distance", self.distance)
        if self.distance < 0:
            raise InvalidOptionError("distance", self.distance, "must be >= 0")
        if not isinstance(self.min_match_char_length, int) or isinstance(
            self.min_match_char_length, bool
        ):
            raise InvalidOptionError(
                "min_match_char_length", self.min_match_char_length, "must be an integer"
            )
        if self.min_match_char_length < 1:
            raise InvalidOptionError(
                "min_match_char_length", self.min_match_char_length, "must be >= 1"
            )

    @staticmethod
    def _check_number(name: str, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidOptionError(name, value, "must be a number")

    @property
    def max_weight(self) -> float:
        return max(key.weight for key in self.keys)

    @property
    def needs_spans(self) -> bool:
        """Whether the matcher has to track matched character spans."""
        return self.min_match_char_length > 1 or self.include_matches

    def replace(self, **changes) -> "SearchOptions":
        """Return a copy with ``changes`` applied (and re-validated)."""
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SearchOptions":
        """Build options from a plain mapping, e.g. a parsed YAML block.

        Both snake_case and the widget's camelCase names are accepted.
        Unknown names are rejected.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for name, value in data.items():
            attr = _ALIASES.get(name, name)
            if attr not in known:
                raise InvalidOptionError(name, value, "unknown search option")
            kwargs[attr] = value
        return cls(**kwargs)


def check_limit(limit: Any) -> int | None:
    """Validate a caller-supplied result limit. ``None`` means unlimited."""
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidOptionError("limit", limit, "must be an integer or None")
    if limit < 0:
        raise InvalidOptionError("limit", limit, "must be >= 0")
    return limit
