"""Tests for the result cache, the debouncer and the autocomplete controller."""

import asyncio

import pytest

from fuzzycomplete.session import AutocompleteController, Debouncer, ResultCache


class TestResultCache:
    """Tests for ResultCache."""

    def test_miss_then_hit(self):
        """Test that a stored entry is served and counted."""
        cache = ResultCache()
        assert cache.get("val") is None
        cache.put("val", [1, 2])
        assert cache.get("val") == [1, 2]
        assert (cache.hits, cache.misses) == (1, 1)

    def test_returns_copies(self):
        """Test that callers cannot change cached lists."""
        cache = ResultCache()
        cache.put("val", [1, 2])
        cache.get("val").append(3)
        assert cache.get("val") == [1, 2]

    def test_evicts_least_recently_used(self):
        """Test that the least recently used entry goes first."""
        cache = ResultCache(max_entries=2)
        cache.put("a", [1])
        cache.put("b", [2])
        cache.get("a")
        cache.put("c", [3])
        assert "a" in cache
        assert "b" not in cache
        assert len(cache) == 2

    def test_zero_size_stores_nothing(self):
        """Test that a zero-size cache stores nothing."""
        cache = ResultCache(max_entries=0)
        cache.put("a", [1])
        assert len(cache) == 0

    def test_clear(self):
        """Test that clear() empties the cache."""
        cache = ResultCache()
        cache.put("a", [1])
        cache.clear()
        assert cache.get("a") is None

    def test_negative_size(self):
        """Test that a negative size raises."""
        with pytest.raises(ValueError):
            ResultCache(max_entries=-1)


class TestDebouncer:
    """Tests for Debouncer."""

    def test_zero_wait_calls_through(self):
        """Test that a zero wait calls the callback at once."""
        calls = []
        debouncer = Debouncer(0, calls.append)
        debouncer.call("a")
        debouncer.call("ab")
        assert calls == ["a", "ab"]
        assert not debouncer.pending

    def test_negative_wait(self):
        """Test that a negative wait raises."""
        with pytest.raises(ValueError):
            Debouncer(-0.1, print)

    @pytest.mark.asyncio(loop_scope="function")
    async def test_only_last_call_of_burst_runs(self):
        """Test that only the last call of a burst runs."""
        calls = []
        debouncer = Debouncer(0.05, calls.append)
        debouncer.call("v")
        debouncer.call("va")
        debouncer.call("val")
        assert calls == []
        assert debouncer.pending

        await asyncio.sleep(0.2)
        assert calls == ["val"]
        assert not debouncer.pending

    @pytest.mark.asyncio(loop_scope="function")
    async def test_cancel_drops_pending_call(self):
        """Test that cancel() drops the pending call."""
        calls = []
        debouncer = Debouncer(0.05, calls.append)
        debouncer.call("v")
        debouncer.cancel()
        await asyncio.sleep(0.15)
        assert calls == []

    @pytest.mark.asyncio(loop_scope="function")
    async def test_flush_runs_now(self):
        """Test that flush() runs the pending call immediately."""
        calls = []
        debouncer = Debouncer(10, lambda keyword, generation: calls.append((keyword, generation)))
        debouncer.call("val", 3)
        debouncer.flush()
        assert calls == [("val", 3)]
        assert not debouncer.pending

    @pytest.mark.asyncio(loop_scope="function")
    async def test_leading_runs_first_call_of_burst(self):
        """Test that leading mode runs the first call of a burst."""
        calls = []
        debouncer = Debouncer(0.05, calls.append, leading=True)
        debouncer.call("v")
        debouncer.call("va")
        assert calls == ["v"]

        await asyncio.sleep(0.2)
        assert calls == ["v"]

        debouncer.call("x")
        assert calls == ["v", "x"]
        debouncer.cancel()


class Recorder:
    """Collects controller callbacks."""

    def __init__(self):
        self.searches = []
        self.hovers = []
        self.selects = []
        self.focused = 0
        self.cleared = 0

    def callbacks(self) -> dict:
        return {
            "on_search": lambda keyword, results: self.searches.append((keyword, list(results))),
            "on_hover": self.hovers.append,
            "on_select": self.selects.append,
            "on_focus": self._focus,
            "on_clear": self._clear,
        }

    def _focus(self):
        self.focused += 1

    def _clear(self):
        self.cleared += 1


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def controller(items, recorder):
    return AutocompleteController(items, {"keys": ["name"]}, **recorder.callbacks())


def typed(controller, text):
    """Simulate a keystroke followed by its debounced search."""
    generation = controller.input_changed(text)
    return controller.run_search(text, generation)


class TestControllerSearch:
    """Searching, staleness and caching."""

    def test_search_publishes_results(self, controller, recorder, items):
        """Test that a search stores results and fires on_search."""
        results = typed(controller, "valu")
        assert results == items
        assert controller.results == items
        assert not controller.is_typing
        assert recorder.searches == [("valu", items)]

    def test_stale_generation_is_dropped(self, controller, recorder):
        """Test that a search older than the last keystroke is dropped."""
        first = controller.input_changed("va")
        second = controller.input_changed("val")
        assert controller.run_search("va", first) is None
        assert controller.results == []
        assert recorder.searches == []
        assert len(controller.run_search("val", second)) == 4

    def test_max_results(self, items):
        """Test that results are capped at max_results."""
        controller = AutocompleteController(items, max_results=2)
        assert typed(controller, "v") == items[:2]

    def test_invalid_max_results(self, items):
        """Test that a negative max_results raises."""
        from fuzzycomplete.matching import InvalidOptionError

        with pytest.raises(InvalidOptionError):
            AutocompleteController(items, max_results=-1)

    def test_cache_ignores_case(self, controller):
        """Test that queries differing in case share a cache entry."""
        typed(controller, "val")
        typed(controller, "VAL")
        assert controller.cache.hits == 1

    def test_set_items_refreshes_visible_results(self, controller):
        """Test that new items refresh results on screen."""
        typed(controller, "val")
        new_items = [{"id": 9, "name": "value9"}]
        controller.set_items(new_items)
        assert controller.results == new_items
        assert controller.items is new_items

    def test_set_options_clears_cache(self, controller):
        """Test that new options invalidate cached results."""
        typed(controller, "val")
        controller.set_options({"keys": ["title"]})
        assert len(controller.cache) == 0
        assert typed(controller, "val") == []

    def test_set_input_searches_immediately(self, controller, items):
        """Test that programmatic input searches without debounce."""
        results = controller.set_input("value0")
        assert results[0] == items[0]
        assert controller.results == results
        assert controller.search_string == "value0"
        assert not controller.is_typing


class TestControllerHighlight:
    """Keyboard highlight cycling."""

    @pytest.fixture
    def controller(self, items, recorder):
        controller = AutocompleteController(items, max_results=3, **recorder.callbacks())
        typed(controller, "v")
        return controller

    def test_down_cycles_through_input(self, controller):
        """Test that down past the last row returns to the input."""
        assert [controller.highlight_next() for _ in range(4)] == [0, 1, 2, -1]

    def test_up_from_input_wraps_to_last(self, controller):
        """Test that up from the input wraps to the last row."""
        assert controller.highlight_previous() == 2
        assert controller.highlight_previous() == 1
        assert controller.highlight_previous() == 0
        assert controller.highlight_previous() == -1

    def test_hover_reports_highlighted_record(self, controller, recorder, items):
        """Test that on_hover receives each highlighted record."""
        controller.highlight_next()
        controller.highlight_next()
        assert recorder.hovers == [items[0], items[1]]
        assert controller.highlighted_item == items[1]

    def test_nothing_highlighted_without_results(self, items):
        """Test that cycling with no results stays on the input."""
        controller = AutocompleteController(items)
        assert controller.highlight_next() == -1
        assert controller.highlight_previous() == -1
        assert controller.highlighted_item is None


class TestControllerSelection:
    """Submit, select, clear, focus and blur."""

    def test_submit_highlighted(self, controller, recorder, items):
        """Test that enter selects the highlighted record."""
        typed(controller, "v")
        controller.highlight_next()
        assert controller.submit() == items[0]
        assert recorder.selects == [items[0]]
        assert recorder.searches[-1] == ("value0", items)
        assert controller.search_string == "value0"
        assert controller.results == []
        assert controller.highlighted == -1
        assert controller.is_search_complete

    def test_submit_typed_text(self, controller, recorder, items):
        """Test that enter with no highlight searches the typed text."""
        typed(controller, "val")
        assert controller.submit() is None
        assert recorder.selects == []
        assert recorder.searches[-1] == ("val", items)
        assert controller.results == []

    def test_submit_makes_pending_search_stale(self, controller):
        """Test that a search started before submit is dropped."""
        generation = controller.input_changed("v")
        controller.submit()
        assert controller.run_search("v", generation) is None
        assert controller.results == []

    def test_select(self, controller, recorder, items):
        """Test that selecting a record fills the input and closes the list."""
        typed(controller, "v")
        controller.select(items[2])
        assert recorder.selects == [items[2]]
        assert controller.search_string == "value2"
        assert controller.results == []
        assert controller.highlighted == -1

    def test_clear(self, controller, recorder):
        """Test that clear() empties the input and fires on_clear."""
        typed(controller, "v")
        generation = controller.generation
        controller.clear()
        assert recorder.cleared == 1
        assert controller.search_string == ""
        assert controller.results == []
        assert controller.generation > generation

    def test_focus_shows_first_items(self, items, recorder):
        """Test that focus lists the first items when enabled."""
        controller = AutocompleteController(
            items, max_results=2, show_items_on_focus=True, **recorder.callbacks()
        )
        assert controller.focus() == items[:2]
        assert controller.has_focus
        assert recorder.focused == 1

    def test_focus_without_items_on_focus(self, controller):
        """Test that focus shows nothing by default."""
        assert controller.focus() == []

    def test_blur(self, controller):
        """Test that blur closes the list and resets the highlight."""
        typed(controller, "v")
        controller.highlight_next()
        controller.focus()
        controller.blur()
        assert not controller.has_focus
        assert controller.results == []
        assert controller.highlighted == -1


class TestControllerDisplay:
    """Display text and the "No results" flag."""

    def test_item_text(self, controller, items):
        """Test the text copied into the input for a record."""
        assert controller.item_text(items[1]) == "value1"
        assert controller.item_text("plain") == "plain"
        assert controller.item_text({"id": 5}) == ""

    def test_format_result(self, items):
        """Test that format_result changes display text only."""
        controller = AutocompleteController(items, format_result=lambda r: f"#{r['id']} {r['name']}")
        assert controller.display_text(items[3]) == "#3 value3"
        assert controller.item_text(items[3]) == "value3"

    def test_no_results_after_finished_search(self, controller):
        """Test that no-results shows only after a finished empty search."""
        generation = controller.input_changed("zzz")
        assert not controller.show_no_results
        controller.run_search("zzz", generation)
        assert controller.show_no_results
        controller.erase_results()
        assert not controller.show_no_results

    def test_no_results_disabled(self, items):
        """Test that show_no_results off hides the message."""
        controller = AutocompleteController(items, show_no_results=False)
        typed(controller, "zzz")
        assert not controller.show_no_results

    def test_no_results_hidden_when_input_empty(self, controller):
        """Test that an empty input never shows no-results."""
        typed(controller, "")
        assert not controller.show_no_results
