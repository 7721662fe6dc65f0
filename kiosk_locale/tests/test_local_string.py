"""Tests for LocalizedString."""

import pytest

from kiosk_locale.localization.languages import Language
from kiosk_locale.localization.local_string import LocalizedString

EN = Language.ENGLISH
RU = Language.RUSSIAN


def _recorder(localized: LocalizedString) -> list[tuple[str, str]]:
    events: list[tuple[str, str]] = []
    localized.subscribe(lambda s, old: events.append((old, s.value)))
    return events


class TestResolution:
    """Initial value and formatting."""

    def test_resolves_immediately(self, store, state):
        localized = LocalizedString(store, state, "hello")
        assert localized.value == "Hello"
        assert str(localized) == "Hello"

    def test_formats_positional_args(self, store, state):
        localized = LocalizedString(store, state, "pair", [1, 2.5])
        assert localized.value == "1 and 2.5"

    def test_missing_key_falls_back(self, store, state):
        localized = LocalizedString(store, state, "nonexistent.key")
        assert localized.value == "nonexistent.key"

    def test_escaped_newlines_expand(self, store, state):
        assert LocalizedString(store, state, "multi").value == "First\nSecond"

    def test_template_without_args_is_not_formatted(self, store, state):
        store.ingest("key,en\nbraces,{literal}\n")
        assert LocalizedString(store, state, "braces").value == "{literal}"

    def test_mismatched_args_raise(self, store, state):
        with pytest.raises(IndexError):
            LocalizedString(store, state, "pair", ["only one"])


class TestLanguageChange:
    """Reacting to LanguageState notifications."""

    def test_language_change_fires_once_with_old_value(self, store, state):
        localized = LocalizedString(store, state, "hello")
        events = _recorder(localized)

        state.set_current(RU)

        assert events == [("Hello", "Привет")]
        assert localized.value == "Привет"

    def test_formatted_value_follows_language(self, store, state):
        localized = LocalizedString(store, state, "score", [7])
        state.set_current(RU)
        assert localized.value == "Счёт: 7"

    def test_identical_text_does_not_fire(self, store, state):
        localized = LocalizedString(store, state, "same")
        events = _recorder(localized)

        state.set_current(RU)

        assert events == []
        assert localized.value == "OK"

    def test_fallback_equal_to_previous_value_does_not_fire(self, store, state):
        store.ingest("key,en\nbye,bye\n")
        localized = LocalizedString(store, state, "bye")
        events = _recorder(localized)

        state.set_current(RU)  # RU cell is blank, falls back to "bye"

        assert events == []

    def test_repeated_switch_notifies_once(self, store, state):
        localized = LocalizedString(store, state, "hello")
        events = _recorder(localized)
        state.set_current(RU)
        state.set_current(RU)
        assert len(events) == 1

    def test_many_strings_share_one_state(self, store, state):
        first = LocalizedString(store, state, "hello")
        second = LocalizedString(store, state, "bye")
        state.set_current(RU)
        assert (first.value, second.value) == ("Привет", "bye")
        assert state.subscriber_count == 2


class TestReassignment:
    """set_key / set_args."""

    def test_set_key_recomputes(self, store, state):
        localized = LocalizedString(store, state, "hello")
        events = _recorder(localized)

        localized.set_key("bye")

        assert localized.key == "bye"
        assert localized.value == "Bye"
        assert events == [("Hello", "Bye")]

    def test_set_same_key_is_noop(self, store, state):
        localized = LocalizedString(store, state, "hello")
        events = _recorder(localized)
        localized.set_key("hello")
        assert events == []

    def test_key_property_setter(self, store, state):
        localized = LocalizedString(store, state, "hello")
        localized.key = "bye"
        assert localized.value == "Bye"

    def test_set_args_replaces_whole_list(self, store, state):
        localized = LocalizedString(store, state, "pair", ["a", "b"])
        localized.set_args(["c", "d"])
        assert localized.args == ("c", "d")
        assert localized.value == "c and d"

    def test_set_args_uses_current_language(self, store, state):
        localized = LocalizedString(store, state, "score", [1])
        state.set_current(RU)
        localized.args = [2]
        assert localized.value == "Счёт: 2"


class TestRefresh:
    """Re-resolving after the store changes."""

    def test_refresh_picks_up_late_source(self, store, state):
        localized = LocalizedString(store, state, "late.key")
        events = _recorder(localized)

        store.ingest("key,en\nlate.key,Arrived\n")
        assert localized.value == "late.key"

        localized.refresh()
        assert localized.value == "Arrived"
        assert events == [("late.key", "Arrived")]

    def test_refresh_without_change_is_silent(self, store, state):
        localized = LocalizedString(store, state, "hello")
        events = _recorder(localized)
        localized.refresh()
        assert events == []


class TestDispose:
    """Disposal lifecycle."""

    def test_dispose_unsubscribes(self, store, state):
        localized = LocalizedString(store, state, "hello")
        events = _recorder(localized)

        localized.dispose()
        state.set_current(RU)

        assert events == []
        assert localized.value == "Hello"
        assert state.subscriber_count == 0
        assert localized.disposed

    def test_dispose_is_idempotent(self, store, state):
        localized = LocalizedString(store, state, "hello")
        localized.dispose()
        localized.dispose()
        assert state.subscriber_count == 0

    def test_dispose_order_does_not_matter(self, store, state):
        first = LocalizedString(store, state, "hello")
        second = LocalizedString(store, state, "hello")
        second.dispose()
        first.dispose()
        second.dispose()
        assert state.subscriber_count == 0

    def test_dispose_clears_value_observers(self, store, state):
        localized = LocalizedString(store, state, "hello")
        events = _recorder(localized)
        localized.dispose()
        localized.set_key("bye")
        assert events == []

    def test_context_manager_disposes(self, store, state):
        with LocalizedString(store, state, "hello") as localized:
            assert state.subscriber_count == 1
        assert localized.disposed
        assert state.subscriber_count == 0
