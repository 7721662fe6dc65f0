"""Current-language state with change notifications.

Subscribers are called synchronously from set_current() as
callback(new_language, previous_language). A subscriber must not call
set_current() from inside its own notification.
"""

from collections.abc import Callable, Iterable

from kiosk_locale.core.event_bus import EventBus
from kiosk_locale.core.event_payloads import LanguageChangedPayload
from kiosk_locale.core.events import EventType
from kiosk_locale.core.logging_utils import log_event, setup_logger
from kiosk_locale.localization.errors import LocalizationError
from kiosk_locale.localization.languages import Language, detect_system_language
from kiosk_locale.localization.observers import ObserverList
from kiosk_locale.localization.persistence import LanguagePersistence

__all__ = ["DEFAULT_PERSIST_KEY", "LanguageChangedCallback", "LanguageState"]

logger = setup_logger(__name__)

DEFAULT_PERSIST_KEY = "localization_lang_persist"

LanguageChangedCallback = Callable[[Language, Language], None]


class LanguageState:
    """Holds the active language for the lifetime of the process."""

    def __init__(
        self,
        supported_languages: Iterable[Language],
        persistence: LanguagePersistence,
        default_language: Language | None = None,
        persist_key: str = DEFAULT_PERSIST_KEY,
        ambient_language: Callable[[], Language] = detect_system_language,
        event_bus: EventBus | None = None,
    ):
        """Initialize language state.

        The current language is restored lazily on first access.

        Args:
            supported_languages: Languages the application ships
            persistence: Storage for the last selected language
            default_language: Used when nothing valid was persisted
            persist_key: Preference key holding the language number
            ambient_language: Fallback when there is no default
            event_bus: Optional bus that also receives LANGUAGE_CHANGED
        """
        self._supported = frozenset(supported_languages)
        self._persistence = persistence
        self._default = default_language
        self._persist_key = persist_key
        self._ambient_language = ambient_language
        self._event_bus = event_bus

        self._current: Language | None = None
        self._restoring = False
        self._observers = ObserverList("language change")

    @property
    def supported_languages(self) -> frozenset[Language]:
        return self._supported

    def is_supported(self, language: Language) -> bool:
        return language in self._supported

    def current(self) -> Language:
        """Return the active language, restoring it on first access."""
        if self._current is None:
            if self._restoring:
                raise LocalizationError("Current language accessed while it is being restored")
            self._restoring = True
            try:
                self._current = self._restore()
            finally:
                self._restoring = False
        return self._current

    def _restore(self) -> Language:
        stored = self._persistence.read_int(self._persist_key)
        persisted = Language.from_value(stored) if stored is not None else None

        if persisted is not None and self.is_supported(persisted):
            language = persisted
        elif self._default is not None:
            language = self._default
        else:
            language = self._ambient_language()

        # Repair a stored number that names no language
        if stored is not None and persisted is None:
            logger.warning(f"Discarding invalid persisted language value {stored}")
            self._persistence.write_int(self._persist_key, int(language))

        logger.debug(f"Restored current language: {language.name}")
        return language

    def set_current(self, language: Language):
        """Switch the active language.

        No-op when the language is already current. Otherwise persists the
        new value, then notifies subscribers in registration order.
        """
        previous = self.current()
        if language == previous:
            return

        if not self.is_supported(language):
            logger.warning(f"Switching to unsupported language {language.name}")

        self._current = language
        self._persistence.write_int(self._persist_key, int(language))

        log_event(logger, "language_changed", {"from": previous.name, "to": language.name})
        self._observers.notify(language, previous)

        if self._event_bus is not None:
            payload: LanguageChangedPayload = {"old": previous.name, "new": language.name}
            self._event_bus.emit(EventType.LANGUAGE_CHANGED, payload, source="language_state")

    def subscribe(self, callback: LanguageChangedCallback) -> LanguageChangedCallback:
        """Register callback(new_language, previous_language)."""
        return self._observers.add(callback)

    def unsubscribe(self, callback: LanguageChangedCallback) -> bool:
        """Unregister a callback; safe if it was never registered."""
        return self._observers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._observers)
