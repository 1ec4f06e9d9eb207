"""Fuzzy autocomplete: bitap matching engine, session glue and terminal UIs.

Usage:
    from fuzzycomplete import SearchEngine, SearchOptions

    engine = SearchEngine(items, SearchOptions(keys=["title", "description"]))
    engine.search("dead", limit=10)
"""

from .matching import (
    ConfigFileError,
    FieldKey,
    FuzzyCompleteError,
    InvalidOptionError,
    MatchResult,
    SearchEngine,
    SearchOptions,
)
from .session import AutocompleteController, Debouncer, ResultCache

__all__ = [
    "SearchEngine",
    "SearchOptions",
    "FieldKey",
    "MatchResult",
    "AutocompleteController",
    "Debouncer",
    "ResultCache",
    "FuzzyCompleteError",
    "InvalidOptionError",
    "ConfigFileError",
]
