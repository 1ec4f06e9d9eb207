"""Textual app that puts a SearchAutocomplete over an item file.

Launch with:
    python -m fuzzycomplete.cli tui items.json
    python -m fuzzycomplete.cli.tui items.json --config settings.yaml
"""

import argparse
import json
from typing import Any, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from fuzzycomplete.config import AutocompleteSettings, load_items, load_settings
from fuzzycomplete.matching import FuzzyCompleteError, InvalidOptionError

from .theme import THEMES
from .widgets import SearchAutocomplete


class AutocompleteApp(App):
    """Search an item list and show the selected record."""

    TITLE = "fuzzycomplete"
    SUB_TITLE = "Fuzzy search"

    CSS = """
    Screen {
        padding: 1 2;
    }

    #details {
        margin-top: 1;
        height: auto;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(self, items: Sequence[Any], settings: AutocompleteSettings | None = None, **kwargs):
        super().__init__(**kwargs)
        self.records = items
        self.settings = settings or AutocompleteSettings()
        if self.settings.theme not in THEMES:
            raise InvalidOptionError("theme", self.settings.theme, f"choose from {sorted(THEMES)}")
        self.selected: Any | None = None

    def compose(self) -> ComposeResult:
        settings = self.settings
        yield Header()
        yield SearchAutocomplete(
            self.records,
            settings.search,
            input_debounce=settings.input_debounce,
            max_results=settings.max_results,
            placeholder=settings.placeholder,
            auto_focus=True,
            show_no_results=settings.show_no_results,
            show_no_results_text=settings.show_no_results_text,
            show_items_on_focus=settings.show_items_on_focus,
            result_string_key=settings.result_string_key,
            theme=THEMES[settings.theme],
            styling=settings.styling,
            id="search",
        )
        yield Static("", id="details")
        yield Footer()

    def on_search_autocomplete_hover(self, event: SearchAutocomplete.Hover) -> None:
        self.sub_title = event.autocomplete.controller.display_text(event.item)

    def on_search_autocomplete_selected(self, event: SearchAutocomplete.Selected) -> None:
        self.selected = event.item
        self.query_one("#details", Static).update(
            json.dumps(event.item, indent=2, ensure_ascii=False, default=str)
        )

    def on_search_autocomplete_search(self, event: SearchAutocomplete.Search) -> None:
        self.sub_title = f"{len(event.results)} result(s) for {event.keyword!r}"

    def on_search_autocomplete_cleared(self, event: SearchAutocomplete.Cleared) -> None:
        self.selected = None
        self.sub_title = self.SUB_TITLE
        self.query_one("#details", Static).update("")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the TUI."""
    parser = argparse.ArgumentParser(description="Fuzzy search an item file in the terminal")
    parser.add_argument("items", help="JSON or YAML file with a list of records")
    parser.add_argument("--config", help="YAML settings file")
    args = parser.parse_args(argv)

    try:
        app = AutocompleteApp(load_items(args.items), load_settings(args.config))
    except FuzzyCompleteError as e:
        print(f"Error: {e}")
        return 1
    app.run()
    return 0


if __name__ == "__main__":
    main()
