"""Settings and item files for the command line surfaces.

A settings file is YAML with a ``search`` block of engine options and
top-level display settings::

    search:
      keys:
        - title
        - name: description
          weight: 0.5
      threshold: 0.4
    max_results: 5
    input_debounce: 0.2
    theme: monokai
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from .matching import ConfigFileError, InvalidOptionError, SearchOptions, check_limit
from .session import DEFAULT_INPUT_DEBOUNCE, MAX_RESULTS

logger = logging.getLogger(__name__)


@dataclass
class AutocompleteSettings:
    """Engine options plus the caller-side display settings."""

    search: SearchOptions = field(default_factory=SearchOptions)
    max_results: int = MAX_RESULTS
    input_debounce: float = DEFAULT_INPUT_DEBOUNCE
    result_string_key: str = "name"
    placeholder: str = "Search..."
    show_no_results: bool = True
    show_no_results_text: str = "No results"
    show_items_on_focus: bool = False
    theme: str = "default"
    styling: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.search, SearchOptions):
            self.search = SearchOptions.from_mapping(self.search)
        check_limit(self.max_results)
        if isinstance(self.input_debounce, bool) or not isinstance(self.input_debounce, (int, float)):
            raise InvalidOptionError("input_debounce", self.input_debounce, "must be a number")
        if self.input_debounce < 0:
            raise InvalidOptionError("input_debounce", self.input_debounce, "must be >= 0")
        if not isinstance(self.styling, Mapping):
            raise InvalidOptionError("styling", self.styling, "must be a mapping")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "AutocompleteSettings":
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidOptionError("settings", sorted(unknown), "unknown setting")
        return cls(**data)


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigFileError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigFileError(f"Invalid YAML in {path}: {e}") from e


def load_settings(path: str | Path | None = None) -> AutocompleteSettings:
    """Load settings from a YAML file; defaults when ``path`` is None."""
    if path is None:
        return AutocompleteSettings()
    path = Path(path)
    content = _read_yaml(path)
    if content is None:
        logger.info("Settings file %s is empty, using defaults", path)
        return AutocompleteSettings()
    if not isinstance(content, Mapping):
        raise ConfigFileError(f"Settings file {path} must contain a mapping")
    settings = AutocompleteSettings.from_mapping(content)
    logger.debug("Loaded settings from %s", path)
    return settings


def load_items(path: str | Path) -> list[Any]:
    """Load the searchable records from a JSON or YAML list."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        try:
            items = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigFileError(f"Cannot read {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"Invalid JSON in {path}: {e}") from e
    elif path.suffix.lower() in {".yaml", ".yml"}:
        items = _read_yaml(path)
    else:
        raise ConfigFileError(f"Unsupported item file type: {path.suffix or path.name}")

    if not isinstance(items, list):
        raise ConfigFileError(f"Item file {path} must contain a list")
    logger.debug("Loaded %d items from %s", len(items), path)
    return items
