"""Command line surfaces for the fuzzy autocomplete.

This module provides:
- One-shot search over an item file
- An interactive prompt with fuzzy completion
- A Textual app with the autocomplete widget

Usage:
    python -m fuzzycomplete.cli search items.json "dead poets"
    python -m fuzzycomplete.cli repl items.json
    python -m fuzzycomplete.cli tui items.json --config settings.yaml
"""

__all__ = []
