"""Textual front end for the fuzzy autocomplete."""

from .app import AutocompleteApp, main
from .theme import DEFAULT_THEME, MONOKAI_THEME, THEMES, AutocompleteTheme

__all__ = [
    "AutocompleteApp",
    "AutocompleteTheme",
    "DEFAULT_THEME",
    "MONOKAI_THEME",
    "THEMES",
    "main",
]
