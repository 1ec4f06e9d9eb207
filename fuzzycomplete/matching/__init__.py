"""Fuzzy matching and ranking engine."""

from .bitap import BitapMatcher, bitap_search, compute_score, mask_to_indices, pattern_alphabet
from .engine import SearchEngine
from .errors import ConfigFileError, FuzzyCompleteError, InvalidOptionError
from .fields import FieldScanner
from .normalize import field_norm, normalize, tokenize
from .options import FieldKey, SearchOptions, as_field_key, check_limit
from .ranking import rank
from .result import BitapResult, FieldMatch, MatchResult

__all__ = [
    # Engine
    "SearchEngine",
    "SearchOptions",
    "FieldKey",
    "as_field_key",
    "check_limit",
    # Matching internals
    "BitapMatcher",
    "bitap_search",
    "compute_score",
    "mask_to_indices",
    "pattern_alphabet",
    "FieldScanner",
    "rank",
    "normalize",
    "tokenize",
    "field_norm",
    # Results
    "BitapResult",
    "FieldMatch",
    "MatchResult",
    # Errors
    "FuzzyCompleteError",
    "InvalidOptionError",
    "ConfigFileError",
]
