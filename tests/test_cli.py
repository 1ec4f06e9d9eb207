"""Tests for the command line entry points."""

import json

import pytest

from fuzzycomplete.cli.__main__ import main as cli_main
from fuzzycomplete.cli.search import build_parser, main, options_from_args, parse_key
from fuzzycomplete.matching import FieldKey, InvalidOptionError, SearchOptions


@pytest.fixture
def items_file(tmp_path, items):
    path = tmp_path / "items.json"
    path.write_text(json.dumps(items))
    return path


@pytest.fixture
def movies_file(tmp_path, movies):
    path = tmp_path / "movies.yaml"
    lines = []
    for movie in movies:
        lines.append(f"- id: {movie['id']}")
        lines.append(f"  title: {movie['title']}")
        lines.append(f"  description: {movie['description']}")
    path.write_text("\n".join(lines) + "\n")
    return path


class TestParseKey:
    """Tests for parse_key()."""

    def test_plain_name(self):
        """Test a key without weight."""
        assert parse_key("title") == FieldKey("title")

    def test_weighted(self):
        """Test a key with a weight."""
        assert parse_key("description:0.5") == FieldKey("description", 0.5)

    def test_bad_weight(self):
        """Test that a non-numeric weight is rejected."""
        with pytest.raises(InvalidOptionError):
            parse_key("description:heavy")


class TestOptionsFromArgs:
    """Command line flags override the configured options."""

    def test_no_flags_keeps_base(self):
        """Test that no flags leave the base options untouched."""
        base = SearchOptions()
        args = build_parser().parse_args(["items.json", "q"])
        assert options_from_args(args, base) is base

    def test_flags(self):
        """Test that flags override the base options."""
        args = build_parser().parse_args(
            ["items.json", "q", "--keys", "title", "body:2", "--threshold", "0.3", "--no-sort", "--matches"]
        )
        options = options_from_args(args, SearchOptions())
        assert options.keys == (FieldKey("title"), FieldKey("body", 2.0))
        assert options.threshold == 0.3
        assert options.should_sort is False
        assert options.include_matches is True


class TestSearchCommand:
    """Tests for the search command."""

    def test_prints_ranked_results(self, items_file, capsys):
        """Test the plain-text result listing."""
        assert main([str(items_file), "0"]) == 0
        out = capsys.readouterr().out
        assert "value0" in out
        assert "value1" not in out

    def test_no_results(self, items_file, capsys):
        """Test the message for an unmatched query."""
        assert main([str(items_file), "despair"]) == 0
        assert "No results" in capsys.readouterr().out

    def test_json_output(self, items_file, capsys):
        """Test JSON output with a limit."""
        assert main([str(items_file), "v", "--limit", "2", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert [entry["record"]["id"] for entry in payload] == [0, 1]
        assert [entry["refIndex"] for entry in payload] == [0, 1]
        assert payload[0]["score"] == 0.0

    def test_matches_in_json(self, items_file, capsys):
        """Test that --matches adds spans to JSON output."""
        assert main([str(items_file), "valu", "--limit", "1", "--matches", "--json"]) == 0
        (entry,) = json.loads(capsys.readouterr().out)
        assert entry["matches"] == [{"key": "name", "value": "value0", "indices": [[0, 3]]}]

    def test_weighted_keys_on_yaml(self, movies_file, capsys):
        """Test searching a YAML file on several keys."""
        argv = [str(movies_file), "dead", "--keys", "title", "description", "--threshold", "0.4", "--json"]
        assert main(argv) == 0
        payload = json.loads(capsys.readouterr().out)
        assert [entry["record"]["id"] for entry in payload] == [1, 0]

    def test_config_file(self, items_file, tmp_path, capsys):
        """Test that a settings file supplies the limit."""
        config = tmp_path / "settings.yaml"
        config.write_text("max_results: 1\n")
        assert main([str(items_file), "v", "--config", str(config), "--json"]) == 0
        assert len(json.loads(capsys.readouterr().out)) == 1

    def test_invalid_option_exits_with_error(self, items_file, capsys):
        """Test that a bad option exits 1 with a message."""
        assert main([str(items_file), "v", "--threshold", "2"]) == 1
        assert "threshold" in capsys.readouterr().err

    def test_missing_items_file(self, tmp_path, capsys):
        """Test that a missing item file exits 1."""
        assert main([str(tmp_path / "missing.json"), "v"]) == 1
        assert "Error:" in capsys.readouterr().err


class TestUnifiedCli:
    """Tests for the command dispatcher."""

    def test_dispatches_search(self, items_file, capsys):
        """Test that the search command is dispatched."""
        assert cli_main(["search", str(items_file), "0"]) == 0
        assert "value0" in capsys.readouterr().out

    def test_help(self, capsys):
        """Test that --help prints the command list."""
        assert cli_main(["--help"]) == 0
        assert "Commands:" in capsys.readouterr().out

    def test_no_command(self, capsys):
        """Test that no command exits 1."""
        assert cli_main([]) == 1

    def test_unknown_command(self, capsys):
        """Test that an unknown command exits 1."""
        assert cli_main(["frobnicate"]) == 1
        assert "Unknown command: frobnicate" in capsys.readouterr().out
