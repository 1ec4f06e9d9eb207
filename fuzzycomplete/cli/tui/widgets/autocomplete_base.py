"""Base mixin for autocomplete widgets with reliable dropdown behavior."""

import time

from textual.css.query import NoMatches
from textual.widgets import Input, OptionList


class AutocompleteMixin:
    """Dropdown show/hide behavior shared by autocomplete widgets.

    Focus events fire right after a selection moves focus back to the input,
    which would re-open the dropdown that was just closed. Shows are ignored
    for ``SELECTION_COOLDOWN_MS`` after a selection.

    Usage:
        class MyWidget(AutocompleteMixin, Vertical):
            def _get_input_widget(self) -> Input:
                return self.query_one("#my-input", Input)

            def _get_option_list(self) -> OptionList:
                return self.query_one("#my-options", OptionList)
    """

    SELECTION_COOLDOWN_MS: int = 300

    _selection_timestamp: float = 0
    # Value written into the input by code; its Changed event is not a keystroke
    _programmatic_value: str | None = None

    def _init_autocomplete(self) -> None:
        self._selection_timestamp = 0
        self._programmatic_value = None

    def _get_input_widget(self) -> Input:
        raise NotImplementedError("Subclass must implement _get_input_widget()")

    def _get_option_list(self) -> OptionList:
        raise NotImplementedError("Subclass must implement _get_option_list()")

    def _on_dropdown_dismissed(self) -> None:
        """Hook called when focus has left both the input and the dropdown."""

    def _is_in_selection_cooldown(self) -> bool:
        if self._selection_timestamp == 0:
            return False
        elapsed_ms = (time.monotonic() - self._selection_timestamp) * 1000
        return elapsed_ms < self.SELECTION_COOLDOWN_MS

    def _show_dropdown(self) -> None:
        if self._is_in_selection_cooldown():
            return
        try:
            self._get_option_list().add_class("visible")
        except NoMatches:
            pass

    def _hide_dropdown(self) -> None:
        try:
            option_list = self._get_option_list()
        except NoMatches:
            return
        option_list.remove_class("visible")
        option_list.highlighted = None

    def _is_dropdown_visible(self) -> bool:
        try:
            return self._get_option_list().has_class("visible")
        except NoMatches:
            return False

    def _set_input_value(self, value: str) -> None:
        """Write ``value`` into the input without triggering a new search."""
        input_widget = self._get_input_widget()
        if input_widget.value == value:
            return
        self._programmatic_value = value
        input_widget.value = value

    def _consume_programmatic_change(self, value: str) -> bool:
        """True when an Input.Changed event was caused by _set_input_value."""
        expected = self._programmatic_value
        self._programmatic_value = None
        return expected is not None and expected == value

    def _mark_selected(self) -> None:
        """Start the cooldown after a selection and close the dropdown."""
        self._selection_timestamp = time.monotonic()
        self._hide_dropdown()

    def _should_show_on_focus(self) -> bool:
        return not self._is_in_selection_cooldown()

    def _maybe_hide_after_blur(self, delay_ms: int = 200) -> None:
        """Hide the dropdown shortly after blur unless focus moved into it.

        Call from a blur handler. The delay lets a click on an option land
        before the list disappears.
        """
        if self._is_in_selection_cooldown():
            return

        def check_and_hide() -> None:
            if self._is_in_selection_cooldown():
                return
            try:
                input_focused = self._get_input_widget().has_focus
                options_focused = self._get_option_list().has_focus
            except NoMatches:
                return
            if not input_focused and not options_focused:
                self._hide_dropdown()
                self._on_dropdown_dismissed()

        if hasattr(self, "set_timer"):
            self.set_timer(delay_ms / 1000.0, check_and_hide)
