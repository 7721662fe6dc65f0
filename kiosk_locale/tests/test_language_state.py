"""Tests for LanguageState."""

import pytest

from kiosk_locale.core.event_bus import EventBus
from kiosk_locale.core.events import EventType
from kiosk_locale.localization.errors import LocalizationError
from kiosk_locale.localization.language_state import DEFAULT_PERSIST_KEY, LanguageState
from kiosk_locale.localization.languages import Language
from kiosk_locale.localization.persistence import MemoryPreferences

EN = Language.ENGLISH
RU = Language.RUSSIAN
SUPPORTED = [EN, RU]


class TestRestore:
    """Lazy resolution of the initial language."""

    def test_default_when_nothing_persisted(self, preferences):
        state = LanguageState(SUPPORTED, preferences, default_language=RU)
        assert state.current() is RU

    def test_persisted_value_wins(self):
        prefs = MemoryPreferences({DEFAULT_PERSIST_KEY: int(RU)})
        state = LanguageState(SUPPORTED, prefs, default_language=EN)
        assert state.current() is RU

    def test_unsupported_persisted_value_uses_default(self):
        prefs = MemoryPreferences({DEFAULT_PERSIST_KEY: int(Language.GERMAN)})
        state = LanguageState(SUPPORTED, prefs, default_language=EN)
        assert state.current() is EN

    def test_invalid_persisted_value_is_repaired(self):
        prefs = MemoryPreferences({DEFAULT_PERSIST_KEY: 999})
        state = LanguageState(SUPPORTED, prefs, default_language=RU)
        assert state.current() is RU
        assert prefs.read_int(DEFAULT_PERSIST_KEY) == int(RU)

    def test_ambient_language_without_default(self, preferences):
        state = LanguageState(SUPPORTED, preferences, ambient_language=lambda: RU)
        assert state.current() is RU

    def test_restore_happens_once(self, preferences):
        calls = []

        def ambient():
            calls.append(1)
            return EN

        state = LanguageState(SUPPORTED, preferences, ambient_language=ambient)
        state.current()
        state.current()
        assert calls == [1]

    def test_custom_persist_key(self):
        prefs = MemoryPreferences({"my_key": int(RU)})
        state = LanguageState(SUPPORTED, prefs, default_language=EN, persist_key="my_key")
        assert state.current() is RU

    def test_reentrant_access_during_restore_raises(self, preferences):
        holder = {}

        def ambient():
            return holder["state"].current()

        state = LanguageState(SUPPORTED, preferences, ambient_language=ambient)
        holder["state"] = state
        with pytest.raises(LocalizationError):
            state.current()


class TestSetCurrent:
    """Switching languages."""

    def test_notifies_with_new_and_previous(self, state):
        calls = []
        state.subscribe(lambda new, old: calls.append((new, old)))

        state.set_current(RU)

        assert state.current() is RU
        assert calls == [(RU, EN)]

    def test_same_language_is_noop(self, state, preferences):
        calls = []
        state.subscribe(lambda new, old: calls.append((new, old)))

        state.set_current(RU)
        state.set_current(RU)
        state.set_current(EN)
        state.set_current(EN)

        assert calls == [(RU, EN), (EN, RU)]

    def test_setting_initial_language_is_noop(self, state, preferences):
        calls = []
        state.subscribe(lambda new, old: calls.append(new))
        state.set_current(EN)
        assert calls == []
        assert preferences.read_int(DEFAULT_PERSIST_KEY) is None

    def test_persists_before_notifying(self, state, preferences):
        seen = []
        state.subscribe(lambda new, old: seen.append(preferences.read_int(DEFAULT_PERSIST_KEY)))
        state.set_current(RU)
        assert seen == [int(RU)]

    def test_subscribers_called_in_insertion_order(self, state):
        order = []
        state.subscribe(lambda new, old: order.append("first"))
        state.subscribe(lambda new, old: order.append("second"))
        state.set_current(RU)
        assert order == ["first", "second"]

    def test_failing_subscriber_does_not_block_others(self, state):
        calls = []

        def broken(new, old):
            raise RuntimeError("bad subscriber")

        state.subscribe(broken)
        state.subscribe(lambda new, old: calls.append(new))

        state.set_current(RU)

        assert calls == [RU]
        assert state.current() is RU

    def test_unsubscribe(self, state):
        calls = []

        def callback(new, old):
            calls.append(new)

        state.subscribe(callback)
        assert state.unsubscribe(callback) is True
        assert state.unsubscribe(callback) is False
        state.set_current(RU)
        assert calls == []
        assert state.subscriber_count == 0

    def test_unsupported_language_still_switches(self, state):
        state.set_current(Language.GERMAN)
        assert state.current() is Language.GERMAN
        assert not state.is_supported(Language.GERMAN)

    def test_emits_event_on_bus(self, preferences):
        bus = EventBus()
        received = []
        bus.subscribe(EventType.LANGUAGE_CHANGED, received.append)
        state = LanguageState(SUPPORTED, preferences, default_language=EN, event_bus=bus)

        state.set_current(RU)
        bus.process_events()

        assert len(received) == 1
        assert received[0].payload == {"old": "ENGLISH", "new": "RUSSIAN"}
        assert received[0].source == "language_state"
