"""Reactive localized string bound to a key and format arguments."""

from collections.abc import Callable, Iterable
from typing import Any

from kiosk_locale.localization.language_state import LanguageState
from kiosk_locale.localization.languages import Language
from kiosk_locale.localization.observers import ObserverList
from kiosk_locale.localization.store import LocalizationStore

__all__ = ["LocalizedString", "ValueChangedCallback"]

ValueChangedCallback = Callable[["LocalizedString", str], None]


class LocalizedString:
    """Resolved text for a key that follows the active language.

    The value is recomputed when the language changes and when the key or
    arguments are reassigned. Observers receive (localized_string, old_value)
    only when the resolved text actually changes.

    The text is resolved against whatever the store holds at that moment; a
    handle built before its source has loaded shows the key until refresh()
    is called. LocalizationService.localized_string() refreshes on ready.

    Call dispose() (or use the instance as a context manager) when the
    consumer goes away. Using a disposed instance for anything other than
    reading its last value or disposing again is a caller error.

    Example:
        >>> title = LocalizedString(store, state, "score.label", [42])
        >>> title.subscribe(lambda s, old: label.set_text(s.value))
    """

    def __init__(
        self,
        store: LocalizationStore,
        language_state: LanguageState,
        key: str,
        args: Iterable[Any] | None = None,
    ):
        self._store = store
        self._language_state = language_state
        self._key = key
        self._args: tuple[Any, ...] = tuple(args) if args is not None else ()
        self._observers = ObserverList("localized string")
        self._disposed = False

        self._value = self._resolve(language_state.current())
        language_state.subscribe(self._on_language_changed)

    @property
    def value(self) -> str:
        return self._value

    @property
    def key(self) -> str:
        return self._key

    @key.setter
    def key(self, new_key: str):
        self.set_key(new_key)

    @property
    def args(self) -> tuple[Any, ...]:
        return self._args

    @args.setter
    def args(self, new_args: Iterable[Any] | None):
        self.set_args(new_args)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def set_key(self, new_key: str):
        """Rebind to another key and resolve it immediately."""
        if new_key == self._key:
            return
        self._key = new_key
        self._update(self._language_state.current())

    def set_args(self, new_args: Iterable[Any] | None):
        """Replace the whole argument list and resolve immediately."""
        self._args = tuple(new_args) if new_args is not None else ()
        self._update(self._language_state.current())

    def refresh(self):
        """Re-resolve against the current store contents."""
        self._update(self._language_state.current())

    def subscribe(self, callback: ValueChangedCallback) -> ValueChangedCallback:
        """Register callback(localized_string, old_value)."""
        return self._observers.add(callback)

    def unsubscribe(self, callback: ValueChangedCallback) -> bool:
        return self._observers.remove(callback)

    def dispose(self):
        """Stop following the language; safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        self._language_state.unsubscribe(self._on_language_changed)
        self._observers.clear()

    def _on_language_changed(self, language: Language, previous: Language):
        self._update(language)

    def _resolve(self, language: Language) -> str:
        template = self._store.get_localized(self._key, language)
        if not self._args:
            return template
        return template.format(*self._args)

    def _update(self, language: Language):
        if self._disposed:
            return

        value = self._resolve(language)
        if value == self._value:
            return

        old_value = self._value
        self._value = value
        self._observers.notify(self, old_value)

    def __enter__(self) -> "LocalizedString":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"LocalizedString({self._key!r}, value={self._value!r}, {state})"
