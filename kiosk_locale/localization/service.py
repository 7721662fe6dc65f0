"""Localization service: store, language state and loader behind one object.

This module provides:
- Source loading (manifest-driven, asynchronous) and direct source addition
- Translation lookup with key fallback and positional formatting
- Language switching with listeners and persistence
- Factory for LocalizedString handles
"""

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from kiosk_locale.core.event_bus import EventBus
from kiosk_locale.core.logging_utils import setup_logger
from kiosk_locale.localization.errors import AlreadyInitializedError
from kiosk_locale.localization.language_state import LanguageChangedCallback, LanguageState
from kiosk_locale.localization.languages import Language, LanguageResolver
from kiosk_locale.localization.loader import (
    FileSourceFetcher,
    HttpSourceFetcher,
    LocaleLoader,
    SourceFetcher,
)
from kiosk_locale.localization.local_string import LocalizedString
from kiosk_locale.localization.persistence import (
    JsonFilePreferences,
    LanguagePersistence,
    MemoryPreferences,
)
from kiosk_locale.localization.store import IngestResult, LocalizationStore

logger = setup_logger(__name__)


class LocalizationService:
    """Single entry point for application code.

    Note:
        Lookups made before every source has loaded return the key and log a
        warning. Subscribe to readiness (or the LOCALES_READY event) before
        building the UI.
    """

    def __init__(
        self,
        store: LocalizationStore,
        language_state: LanguageState,
        loader: LocaleLoader | None = None,
        resolver: LanguageResolver | None = None,
    ):
        """Initialize localization service.

        Args:
            store: Locale tables
            language_state: Active language holder
            loader: Asynchronous source loader; without one the service is
                ready as soon as initialize() is called
            resolver: Abbreviation resolver used by add_source()
        """
        self.store = store
        self.language_state = language_state
        self.loader = loader
        self.resolver = resolver or LanguageResolver()
        self._initialized = False
        self._ready_without_loader = False

    # Lifecycle

    def initialize(self, sources: Iterable[str] | None = None):
        """Start loading sources.

        Raises:
            AlreadyInitializedError: If the service was already initialized
        """
        if self._initialized:
            raise AlreadyInitializedError("Localization service already initialized")
        self._initialized = True

        if self.loader is None:
            self._ready_without_loader = True
            return
        self.loader.initialize(sources)

    @property
    def is_ready(self) -> bool:
        if self.loader is None:
            return self._ready_without_loader
        return self.loader.is_ready

    def wait_ready(self, timeout: float | None = None) -> bool:
        if self.loader is None:
            return self._ready_without_loader
        return self.loader.wait_ready(timeout)

    def subscribe_ready(self, callback: Callable[[LocaleLoader], None]):
        if self.loader is None:
            raise RuntimeError("Service has no loader")
        return self.loader.subscribe_ready(callback)

    def shutdown(self):
        if self.loader is not None:
            self.loader.shutdown(wait=False)

    # Sources

    def add_source(self, raw: str, clear: bool = False) -> IngestResult:
        """Ingest a raw table synchronously.

        Raises:
            UnsupportedLanguageError: If a header abbreviation is unknown
        """
        return self.store.ingest(raw, self.resolver, clear=clear)

    def replace_with(self, other: LocalizationStore, clear: bool = False):
        """Merge another store's tables into this service's store."""
        self.store.merge_from(other, clear=clear)

    # Language

    @property
    def current_language(self) -> Language:
        return self.language_state.current()

    def set_language(self, language: Language | str):
        """Set the active language by member or abbreviation."""
        if isinstance(language, str):
            language = self.resolver(language)
        self.language_state.set_current(language)

    def get_available_languages(self) -> list[Language]:
        """Languages that are both supported and loaded."""
        return [
            lang for lang in self.store.languages if self.language_state.is_supported(lang)
        ]

    def add_listener(self, callback: LanguageChangedCallback):
        """Add callback(new_language, previous_language)."""
        self.language_state.subscribe(callback)

    def remove_listener(self, callback: LanguageChangedCallback):
        self.language_state.unsubscribe(callback)

    # Lookup

    def get_localized(self, key: str, language: Language | None = None) -> str:
        """Resolve a key for the given (default: current) language."""
        if not self.is_ready:
            logger.warning(f"Lookup of '{key}' before locales are ready")
            return key
        if language is None:
            language = self.language_state.current()
        return self.store.get_localized(key, language)

    def translate(self, key: str, *args: Any, language: Language | None = None) -> str:
        """Resolve and format a key once.

        Example:
            translate('score.label', 42) -> 'Score: 42'
        """
        template = self.get_localized(key, language)
        return template.format(*args) if args else template

    def get_all_translations(self, key: str) -> dict[Language, str]:
        """Resolve a key for every loaded language; empty until ready."""
        if not self.is_ready:
            logger.warning(f"Translations of '{key}' requested before locales are ready")
            return {}
        return self.store.get_all_translations(key)

    def localized_string(self, key: str, *args: Any) -> LocalizedString:
        """Create a LocalizedString bound to this service's store and state.

        Handles created while sources are loading refresh once on ready, on
        the thread that completes the last source.
        """
        handle = LocalizedString(self.store, self.language_state, key, args)
        if self.loader is not None and not self.loader.is_ready:
            self.loader.subscribe_ready(lambda loader: handle.refresh())
        return handle


def create_fetcher(sources_config: dict[str, Any]) -> SourceFetcher:
    """Build the fetcher named by the sources config section."""
    kind = sources_config.get("kind", "file")
    location = sources_config.get("location", "locales")
    if kind == "http":
        return HttpSourceFetcher(location, timeout=sources_config.get("timeout", 10.0))
    return FileSourceFetcher(location)


def create_preferences(preferences_config: dict[str, Any]) -> LanguagePersistence:
    """Build the persistence backend named by the preferences config section."""
    path = preferences_config.get("file")
    if path:
        return JsonFilePreferences(Path(path))
    return MemoryPreferences()


def create_localization_service(
    config: dict[str, Any],
    event_bus: EventBus | None = None,
    persistence: LanguagePersistence | None = None,
    fetcher: SourceFetcher | None = None,
) -> LocalizationService:
    """Create a LocalizationService from a validated config dictionary.

    Args:
        config: Output of load_config()
        event_bus: Optional bus for language and loading events
        persistence: Overrides the configured preferences backend
        fetcher: Overrides the configured source fetcher

    Returns:
        Service ready to be initialized

    Raises:
        UnsupportedLanguageError: If the config names an unknown language
    """
    loc_config = config.get("localization", {})
    sources_config = config.get("sources", {})

    resolver = LanguageResolver.with_aliases(loc_config.get("language_aliases") or {})
    supported = [resolver(abbr) for abbr in loc_config.get("supported_languages", ["en"])]
    default_abbr = loc_config.get("default_language")
    default_language = resolver(default_abbr) if default_abbr else None

    store = LocalizationStore(resolver)
    state = LanguageState(
        supported,
        persistence or create_preferences(config.get("preferences", {})),
        default_language=default_language,
        persist_key=loc_config.get("persist_key", "localization_lang_persist"),
        event_bus=event_bus,
    )
    fetcher = fetcher or create_fetcher(sources_config)
    loader = LocaleLoader(
        store,
        fetcher,
        manifest=sources_config.get("manifest", "manifest"),
        language_resolver=resolver,
        max_workers=sources_config.get("max_workers", 2),
        event_bus=event_bus,
    )

    logger.info(
        f"Localization service created: supported="
        f"{[lang.name for lang in supported]}, fetcher={fetcher!r}"
    )
    return LocalizationService(store, state, loader, resolver)
