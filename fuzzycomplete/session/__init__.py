"""Event-loop glue around the search engine: debounce, cache, controller."""

from .cache import ResultCache
from .controller import DEFAULT_INPUT_DEBOUNCE, MAX_RESULTS, AutocompleteController
from .debounce import Debouncer

__all__ = [
    "AutocompleteController",
    "Debouncer",
    "ResultCache",
    "DEFAULT_INPUT_DEBOUNCE",
    "MAX_RESULTS",
]
