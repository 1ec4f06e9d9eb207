"""Framework-free state for one autocomplete input.

The controller owns the search engine, the result cache and everything the
dropdown shows: current text, results, highlighted row, and the flags that
decide whether "No results" is displayed. Widgets forward user events to it
and render from its attributes.

Keystrokes are tagged with a generation number. A search that finishes
after a newer keystroke (or after a selection or clear) carries a stale
generation and its results are dropped.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Sequence

from ..matching import SearchEngine, SearchOptions, check_limit, normalize
from .cache import ResultCache

logger = logging.getLogger(__name__)

DEFAULT_INPUT_DEBOUNCE = 0.2
MAX_RESULTS = 10


def _noop(*args, **kwargs) -> None:
    pass


class AutocompleteController:
    """Keyboard, search and selection state of an autocomplete input.

    Args:
        items: Records to search.
        options: Search options (SearchOptions or a plain mapping).
        max_results: Maximum number of results shown.
        result_string_key: Record field shown in the dropdown and copied into
            the input on selection.
        format_result: Optional callable rendering a record for display.
        show_no_results: Report "no results" when a finished search is empty.
        show_items_on_focus: Show the first items when an empty input gains
            focus.
        cache_size: Number of queries kept in the result cache.
        on_search: Called with ``(keyword, results)`` after each search and
            on submit.
        on_hover: Called with the record under the highlight.
        on_select: Called with the selected record.
        on_focus: Called when the input gains focus.
        on_clear: Called when the input is cleared.
    """

    def __init__(
        self,
        items: Sequence[Any] | None = None,
        options: SearchOptions | Mapping[str, Any] | None = None,
        *,
        max_results: int = MAX_RESULTS,
        result_string_key: str = "name",
        format_result: Callable[[Any], str] | None = None,
        show_no_results: bool = True,
        show_items_on_focus: bool = False,
        cache_size: int = 128,
        on_search: Callable[[str, list[Any]], None] | None = None,
        on_hover: Callable[[Any], None] | None = None,
        on_select: Callable[[Any], None] | None = None,
        on_focus: Callable[[], None] | None = None,
        on_clear: Callable[[], None] | None = None,
    ):
        self.engine = SearchEngine(items or [], options)
        self.cache = ResultCache(cache_size)
        self.max_results = check_limit(max_results)
        self.result_string_key = result_string_key
        self.format_result = format_result
        self.show_no_results_enabled = show_no_results
        self.show_items_on_focus = show_items_on_focus

        self.on_search = on_search or _noop
        self.on_hover = on_hover or _noop
        self.on_select = on_select or _noop
        self.on_focus = on_focus or _noop
        self.on_clear = on_clear or _noop

        self.search_string = ""
        self.results: list[Any] = []
        self.highlighted = -1
        self.is_typing = False
        self.is_search_complete = False
        self.has_focus = False
        self._generation = 0

    # ------------------------------------------------------------------
    # Collection and options
    # ------------------------------------------------------------------
    @property
    def items(self) -> Sequence[Any]:
        return self.engine.records

    @property
    def generation(self) -> int:
        return self._generation

    def set_items(self, items: Sequence[Any]) -> None:
        """Rebind the collection; refresh results that are on screen."""
        self.engine.set_collection(items)
        self.cache.clear()
        if self.search_string and self.results:
            self.results = self._search(self.search_string)

    def set_options(self, options: SearchOptions | Mapping[str, Any]) -> None:
        self.engine.configure(self.engine.records, options)
        self.cache.clear()

    # ------------------------------------------------------------------
    # Searching
    # ------------------------------------------------------------------
    def _search(self, keyword: str) -> list[Any]:
        if not keyword:
            return []
        case_sensitive = self.engine.options.is_case_sensitive
        key = (normalize(keyword, case_sensitive), self.max_results)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        results = self.engine.search_records(keyword, self.max_results)
        self.cache.put(key, results)
        return list(results)

    def input_changed(self, text: str) -> int:
        """Record a keystroke and return its generation number."""
        self.search_string = text
        self.is_typing = True
        self.is_search_complete = False
        self._generation += 1
        return self._generation

    def run_search(self, keyword: str, generation: int | None = None) -> list[Any] | None:
        """Search for ``keyword`` and publish the results.

        Returns None without touching any state when ``generation`` is
        older than the latest keystroke.
        """
        if generation is not None and generation != self._generation:
            logger.debug("Dropping stale search %r (gen %d < %d)", keyword, generation, self._generation)
            return None
        self.results = self._search(keyword)
        self.is_typing = False
        self.on_search(keyword, self.results)
        return self.results

    def set_input(self, text: str) -> list[Any]:
        """Set the input text programmatically and search right away."""
        self._generation += 1
        self.search_string = text
        self.is_typing = False
        self.is_search_complete = False
        self.results = self._search(text)
        return self.results

    # ------------------------------------------------------------------
    # Highlight cycling
    # ------------------------------------------------------------------
    def _set_highlight(self, index: int) -> int:
        self.highlighted = index
        if 0 <= index < len(self.results):
            self.on_hover(self.results[index])
        return index

    def highlight(self, index: int) -> int:
        """Highlight a row directly, e.g. under the mouse."""
        return self._set_highlight(index)

    def highlight_next(self) -> int:
        """Move down; past the last row the highlight goes back to the input (-1)."""
        if self.highlighted < len(self.results) - 1:
            return self._set_highlight(self.highlighted + 1)
        return self._set_highlight(-1)

    def highlight_previous(self) -> int:
        """Move up; from the input (-1) the highlight wraps to the last row."""
        if self.highlighted > -1:
            return self._set_highlight(self.highlighted - 1)
        return self._set_highlight(len(self.results) - 1)

    @property
    def highlighted_item(self) -> Any | None:
        if 0 <= self.highlighted < len(self.results):
            return self.results[self.highlighted]
        return None

    # ------------------------------------------------------------------
    # Selection, focus and clearing
    # ------------------------------------------------------------------
    def item_text(self, item: Any) -> str:
        """Text copied into the input when ``item`` is selected."""
        if isinstance(item, Mapping):
            value = item.get(self.result_string_key, "")
        else:
            value = item
        return "" if value is None else str(value)

    def display_text(self, item: Any) -> str:
        """Text shown for ``item`` in the dropdown."""
        if self.format_result is not None:
            return str(self.format_result(item))
        return self.item_text(item)

    def submit(self) -> Any | None:
        """Enter: select the highlighted row, or search the typed text."""
        selected = self.highlighted_item
        if self.results and selected is not None:
            self.on_select(selected)
            self.search_string = self.item_text(selected)
            self.on_search(self.search_string, self.results)
        else:
            self.on_search(self.search_string, self.results)
        self._generation += 1
        self.highlighted = -1
        self.erase_results()
        return selected

    def select(self, item: Any) -> None:
        """Pick ``item`` directly, e.g. by clicking it."""
        self._generation += 1
        self.erase_results()
        self.on_select(item)
        self.search_string = self.item_text(item)
        self.highlighted = -1

    def erase_results(self) -> None:
        self.results = []
        self.is_search_complete = True

    def clear(self) -> None:
        """Empty the input and the dropdown."""
        self._generation += 1
        self.search_string = ""
        self.results = []
        self.highlighted = -1
        self.is_typing = False
        self.on_clear()

    def focus(self) -> list[Any]:
        self.has_focus = True
        self.on_focus()
        if self.show_items_on_focus and not self.results and not self.search_string:
            items = list(self.items)
            self.results = items if self.max_results is None else items[: self.max_results]
        return self.results

    def blur(self) -> None:
        self.has_focus = False
        self.highlighted = -1
        self.erase_results()

    @property
    def show_no_results(self) -> bool:
        """Whether the dropdown should say that nothing matched."""
        return (
            self.show_no_results_enabled
            and len(self.search_string) > 0
            and not self.is_typing
            and not self.results
            and not self.is_search_complete
        )
