#!/usr/bin/env python3
"""
Fuzzy search an item file from the command line.

Usage:
    python -m fuzzycomplete.cli search items.json "dead poets"
    python -m fuzzycomplete.cli search items.yaml valu --keys name --limit 3
    python -m fuzzycomplete.cli search items.json dead --keys title description:0.5
    python -m fuzzycomplete.cli search items.json dead --config settings.yaml --json
"""

import argparse
import json
import logging
import sys

from fuzzycomplete.config import load_items, load_settings
from fuzzycomplete.matching import FieldKey, FuzzyCompleteError, InvalidOptionError, SearchEngine

logger = logging.getLogger(__name__)


def parse_key(text: str) -> FieldKey:
    """Parse ``name`` or ``name:weight``."""
    name, sep, weight = text.rpartition(":")
    if not sep:
        return FieldKey(text)
    try:
        return FieldKey(name, float(weight))
    except ValueError as e:
        raise InvalidOptionError("keys", text, "weight must be a number") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fuzzy search records in a JSON or YAML file")
    parser.add_argument("items", help="JSON or YAML file with a list of records")
    parser.add_argument("query", help="Text to search for")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--keys", nargs="+", help="Fields to search, optionally name:weight")
    parser.add_argument("--threshold", type=float, help="Maximum score accepted (0.0-1.0)")
    parser.add_argument("--location", type=int, help="Expected match position")
    parser.add_argument("--distance", type=int, help="Score decay distance from location")
    parser.add_argument("--min-match-char-length", type=int, help="Shortest matched run kept")
    parser.add_argument("--no-sort", action="store_true", help="Keep input order")
    parser.add_argument("--case-sensitive", action="store_true", help="Match case exactly")
    parser.add_argument("--ignore-location", action="store_true", help="Score on errors only")
    parser.add_argument("--limit", type=int, help="Maximum number of results")
    parser.add_argument("--matches", action="store_true", help="Show matched character spans")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def options_from_args(args, base):
    changes = {}
    if args.keys:
        changes["keys"] = tuple(parse_key(k) for k in args.keys)
    if args.threshold is not None:
        changes["threshold"] = args.threshold
    if args.location is not None:
        changes["location"] = args.location
    if args.distance is not None:
        changes["distance"] = args.distance
    if args.min_match_char_length is not None:
        changes["min_match_char_length"] = args.min_match_char_length
    if args.no_sort:
        changes["should_sort"] = False
    if args.case_sensitive:
        changes["is_case_sensitive"] = True
    if args.ignore_location:
        changes["ignore_location"] = True
    if args.matches:
        changes["include_matches"] = True
    return base.replace(**changes) if changes else base


def print_results(results, as_json: bool = False) -> None:
    if as_json:
        payload = [
            {
                "record": r.record,
                "score": round(r.score, 6),
                "refIndex": r.ref_index,
                "matches": [
                    {"key": m.key, "value": m.value, "indices": [list(span) for span in m.indices]}
                    for m in r.matches
                ],
            }
            for r in results
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
        return

    if not results:
        print("No results")
        return
    for rank, r in enumerate(results, 1):
        print(f"{rank:>3}. [{r.score:.3f}] {json.dumps(r.record, ensure_ascii=False, default=str)}")
        for m in r.matches:
            spans = ", ".join(f"{s}-{e}" for s, e in m.indices)
            print(f"       {m.key}: {m.value!r} ({spans})")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(args.config)
        options = options_from_args(args, settings.search)
        limit = args.limit if args.limit is not None else settings.max_results
        engine = SearchEngine(load_items(args.items), options)
        results = engine.search(args.query, limit)
    except FuzzyCompleteError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_results(results, as_json=args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
