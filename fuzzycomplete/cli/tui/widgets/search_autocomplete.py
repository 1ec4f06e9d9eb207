"""Fuzzy search input with a ranked dropdown of matching records."""

from typing import Any, Callable, Mapping, Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Click, DescendantBlur, DescendantFocus, Key
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from fuzzycomplete.matching import SearchOptions
from fuzzycomplete.session import (
    DEFAULT_INPUT_DEBOUNCE,
    MAX_RESULTS,
    AutocompleteController,
    Debouncer,
)

from ..theme import DEFAULT_THEME, AutocompleteTheme
from .autocomplete_base import AutocompleteMixin

SEARCH_ICON = "⌕"
CLEAR_ICON = "✕"


class ClearIcon(Static):
    """Clickable clear button shown while the input has text."""

    class Pressed(Message):
        """The clear icon was clicked."""

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Pressed())


class SearchAutocomplete(AutocompleteMixin, Vertical):
    """Search box that fuzzy-matches records as the user types.

    Keystrokes are debounced; results come from an AutocompleteController,
    so the matching, caching and highlight rules live outside the widget.

    Keys: up/down cycle the highlight (through the input itself at -1),
    enter selects the highlighted record or submits the typed text, escape
    closes the dropdown.
    """

    DEFAULT_CSS = DEFAULT_THEME.to_css()

    value: reactive[str] = reactive("")

    class Search(Message):
        """A search finished, or the input was submitted."""

        def __init__(self, widget: "SearchAutocomplete", keyword: str, results: list[Any]) -> None:
            super().__init__()
            self.autocomplete = widget
            self.keyword = keyword
            self.results = results

    class Hover(Message):
        """A result was highlighted."""

        def __init__(self, widget: "SearchAutocomplete", item: Any) -> None:
            super().__init__()
            self.autocomplete = widget
            self.item = item

    class Selected(Message):
        """A result was selected."""

        def __init__(self, widget: "SearchAutocomplete", item: Any) -> None:
            super().__init__()
            self.autocomplete = widget
            self.item = item

    class Cleared(Message):
        """The input was cleared with the clear icon."""

        def __init__(self, widget: "SearchAutocomplete") -> None:
            super().__init__()
            self.autocomplete = widget

    class Focused(Message):
        """The input gained focus."""

        def __init__(self, widget: "SearchAutocomplete") -> None:
            super().__init__()
            self.autocomplete = widget

    def __init__(
        self,
        items: Sequence[Any] | None = None,
        options: SearchOptions | Mapping[str, Any] | None = None,
        *,
        input_debounce: float = DEFAULT_INPUT_DEBOUNCE,
        max_results: int = MAX_RESULTS,
        placeholder: str = "",
        auto_focus: bool = False,
        show_icon: bool = True,
        show_clear: bool = True,
        show_no_results: bool = True,
        show_no_results_text: str = "No results",
        show_items_on_focus: bool = False,
        max_length: int = 0,
        result_string_key: str = "name",
        format_result: Callable[[Any], str] | None = None,
        input_search_string: str = "",
        styling: Mapping[str, Any] | None = None,
        theme: AutocompleteTheme | None = None,
        input_id: str | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._init_autocomplete()
        self.placeholder = placeholder
        self.auto_focus = auto_focus
        self.show_icon = show_icon
        self.show_clear = show_clear
        self.show_no_results_text = show_no_results_text
        self.max_length = max_length
        self.input_search_string = input_search_string
        self.input_id = input_id or f"search-input-{id(self)}"

        self.autocomplete_theme = (theme or DEFAULT_THEME).merge(styling)
        self.autocomplete_theme.validate()

        self.controller = AutocompleteController(
            items,
            options,
            max_results=max_results,
            result_string_key=result_string_key,
            format_result=format_result,
            show_no_results=show_no_results,
            show_items_on_focus=show_items_on_focus,
            on_search=lambda keyword, results: self.post_message(
                self.Search(self, keyword, list(results))
            ),
            on_hover=lambda item: self.post_message(self.Hover(self, item)),
            on_select=lambda item: self.post_message(self.Selected(self, item)),
            on_focus=lambda: self.post_message(self.Focused(self)),
            on_clear=lambda: self.post_message(self.Cleared(self)),
        )
        self.debouncer = Debouncer(input_debounce, self._run_search)

    def compose(self) -> ComposeResult:
        with Horizontal(classes="search-row"):
            if self.show_icon:
                yield Static(SEARCH_ICON, classes="search-icon")
            yield Input(
                placeholder=self.placeholder,
                id=self.input_id,
                max_length=self.max_length,
            )
            if self.show_clear:
                yield ClearIcon(CLEAR_ICON, classes="clear-icon")
        option_list = OptionList(id="results")
        option_list.can_focus = False
        yield option_list
        yield Static(self.show_no_results_text, classes="no-results")

    def on_mount(self) -> None:
        if self.autocomplete_theme != DEFAULT_THEME:
            self._apply_theme()
        if self.input_search_string:
            self.set_search_string(self.input_search_string)
        if self.auto_focus:
            self._get_input_widget().focus()

    # ------------------------------------------------------------------
    # Mixin hooks
    # ------------------------------------------------------------------
    def _get_input_widget(self) -> Input:
        return self.query_one(f"#{self.input_id}", Input)

    def _get_option_list(self) -> OptionList:
        return self.query_one("#results", OptionList)

    def _on_dropdown_dismissed(self) -> None:
        self.controller.blur()
        self._render_results()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def items(self) -> Sequence[Any]:
        return self.controller.items

    @property
    def results(self) -> list[Any]:
        return self.controller.results

    @property
    def search_string(self) -> str:
        return self.controller.search_string

    def set_items(self, items: Sequence[Any]) -> None:
        """Replace the searchable records."""
        self.controller.set_items(items)
        if self.is_mounted:
            self._render_results()

    def set_search_string(self, text: str) -> None:
        """Put ``text`` in the input and show its results immediately."""
        self.debouncer.cancel()
        self.controller.set_input(text)
        self.value = text
        self._set_input_value(text)
        self._render_results()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _apply_theme(self) -> None:
        theme = self.autocomplete_theme
        self.styles.background = theme.background_color
        self.styles.color = theme.color
        self.styles.border = (theme.border_style, theme.border_color)

        input_widget = self._get_input_widget()
        input_widget.styles.background = theme.background_color
        input_widget.styles.color = theme.color

        option_list = self._get_option_list()
        option_list.styles.background = theme.background_color
        option_list.styles.color = theme.color
        option_list.styles.border_top = ("solid", theme.line_color)

        for icon in self.query(".search-icon, .clear-icon"):
            icon.styles.color = theme.icon_color
        self.query_one(".no-results", Static).styles.color = theme.placeholder_color

    def _render_results(self) -> None:
        option_list = self._get_option_list()
        option_list.clear_options()
        results = self.controller.results
        if results:
            option_list.add_options(
                [
                    Option(Text(self.controller.display_text(item)), id=f"result-{i}")
                    for i, item in enumerate(results)
                ]
            )
            self._show_dropdown()
        else:
            self._hide_dropdown()
        self._sync_highlight()
        self._update_status()

    def _sync_highlight(self) -> None:
        option_list = self._get_option_list()
        index = self.controller.highlighted
        option_list.highlighted = index if 0 <= index < option_list.option_count else None

    def _update_status(self) -> None:
        self.query_one(".no-results", Static).set_class(self.controller.show_no_results, "visible")
        if self.show_clear:
            self.query_one(ClearIcon).set_class(bool(self.controller.search_string), "visible")

    # ------------------------------------------------------------------
    # Searching
    # ------------------------------------------------------------------
    def _run_search(self, keyword: str, generation: int) -> None:
        if self.controller.run_search(keyword, generation) is None:
            return
        self._render_results()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        if self._consume_programmatic_change(event.value):
            return
        self.value = event.value
        generation = self.controller.input_changed(event.value)
        self._update_status()
        self.debouncer.call(event.value, generation)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.debouncer.cancel()
        selected = self.controller.submit()
        if selected is not None:
            self.value = self.controller.search_string
            self._set_input_value(self.controller.search_string)
            self._mark_selected()
        self._render_results()

    # ------------------------------------------------------------------
    # Keyboard, mouse and focus
    # ------------------------------------------------------------------
    def on_key(self, event: Key) -> None:
        if event.key == "down":
            self.controller.highlight_next()
        elif event.key == "up":
            self.controller.highlight_previous()
        elif event.key == "escape":
            if not self._is_dropdown_visible() and not self.controller.show_no_results:
                return
            self.controller.highlighted = -1
            self.controller.erase_results()
            self._render_results()
        else:
            return
        event.stop()
        event.prevent_default()
        self._sync_highlight()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        results = self.controller.results
        if not 0 <= event.option_index < len(results):
            return
        self.debouncer.cancel()
        self.controller.select(results[event.option_index])
        self.value = self.controller.search_string
        self._set_input_value(self.controller.search_string)
        self._mark_selected()
        self._render_results()
        self._get_input_widget().focus()

    def on_clear_icon_pressed(self, event: ClearIcon.Pressed) -> None:
        event.stop()
        self.debouncer.cancel()
        self.controller.clear()
        self.value = ""
        self._set_input_value("")
        self._render_results()
        self._get_input_widget().focus()

    def on_descendant_focus(self, event: DescendantFocus) -> None:
        if self.controller.has_focus or not self._should_show_on_focus():
            return
        self.controller.focus()
        self._render_results()

    def on_descendant_blur(self, event: DescendantBlur) -> None:
        self._maybe_hide_after_blur(200)
