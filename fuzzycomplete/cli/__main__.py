#!/usr/bin/env python3
"""Unified CLI for fuzzycomplete.

Usage:
    python -m fuzzycomplete.cli <command> [options]

Commands:
    search     Search an item file once and print the ranked results
    repl       Interactive prompt with fuzzy completion
    tui        Textual app with the autocomplete widget

Examples:
    python -m fuzzycomplete.cli search items.json valu --limit 3
    python -m fuzzycomplete.cli search items.json dead --keys title description:0.5
    python -m fuzzycomplete.cli repl items.yaml
    python -m fuzzycomplete.cli tui items.json --config settings.yaml
"""

import sys


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        print(__doc__)
        return 1

    command, rest = argv[0], argv[1:]

    if command == "search":
        from fuzzycomplete.cli.search import main as search_main
        return search_main(rest)
    elif command == "repl":
        from fuzzycomplete.cli.repl import main as repl_main
        return repl_main(rest)
    elif command == "tui":
        from fuzzycomplete.cli.tui.app import main as tui_main
        return tui_main(rest)
    elif command in ("-h", "--help", "help"):
        print(__doc__)
        return 0
    else:
        print(f"Unknown command: {command}")
        print(__doc__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
