"""Interactive prompt with fuzzy completion over an item file.

Usage:
    python -m fuzzycomplete.cli repl items.json
    python -m fuzzycomplete.cli repl items.yaml --config settings.yaml

Type to see ranked completions, Enter to print the best matches,
Ctrl+D to exit.
"""

import argparse
import json

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from fuzzycomplete.config import load_items, load_settings
from fuzzycomplete.matching import FuzzyCompleteError
from fuzzycomplete.session import AutocompleteController

STYLE = Style.from_dict({
    "prompt": "#78dce8 bold",  # Cyan
})


class RecordCompleter(Completer):
    """Completes the whole line with records matching it."""

    def __init__(self, controller: AutocompleteController):
        self.controller = controller

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.strip():
            return
        for item in self.controller.run_search(text) or []:
            yield Completion(
                self.controller.item_text(item),
                start_position=-len(text),
                display=self.controller.display_text(item),
            )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the REPL."""
    parser = argparse.ArgumentParser(description="Fuzzy completion prompt over an item file")
    parser.add_argument("items", help="JSON or YAML file with a list of records")
    parser.add_argument("--config", help="YAML settings file")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
        controller = AutocompleteController(
            load_items(args.items),
            settings.search,
            max_results=settings.max_results,
            result_string_key=settings.result_string_key,
        )
    except FuzzyCompleteError as e:
        print(f"Error: {e}")
        return 1

    print(f"fuzzycomplete - {len(controller.items)} items")
    print("Tab or type for completion, Enter to search, Ctrl+D to exit\n")

    session = PromptSession(
        history=InMemoryHistory(),
        completer=RecordCompleter(controller),
        style=STYLE,
        complete_while_typing=True,
    )

    while True:
        try:
            text = session.prompt([("class:prompt", "search> ")])
        except KeyboardInterrupt:
            print()  # New line after ^C
            continue
        except EOFError:
            print("\nGoodbye!")
            break

        results = controller.run_search(text) or []
        if not results:
            if text:
                print(settings.show_no_results_text)
            continue
        for item in results:
            print(f"  {json.dumps(item, ensure_ascii=False, default=str)}")
    return 0


if __name__ == "__main__":
    main()
