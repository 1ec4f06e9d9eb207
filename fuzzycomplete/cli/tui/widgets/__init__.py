"""Custom TUI widgets."""

from .autocomplete_base import AutocompleteMixin
from .search_autocomplete import ClearIcon, SearchAutocomplete

__all__ = [
    "AutocompleteMixin",
    "ClearIcon",
    "SearchAutocomplete",
]
