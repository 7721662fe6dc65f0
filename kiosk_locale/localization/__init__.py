"""Run-time string localization.

Public API:
    - LocalizationStore.ingest(raw) / get_localized(key, language)
    - LanguageState.current() / set_current(language)
    - LocalizedString(store, state, key, args)
    - LocalizationService / create_localization_service(config)
"""

from kiosk_locale.localization.errors import (
    AlreadyInitializedError,
    LocalizationError,
    UnsupportedLanguageError,
)
from kiosk_locale.localization.language_state import LanguageState
from kiosk_locale.localization.languages import (
    Language,
    LanguageResolver,
    default_resolver,
    detect_system_language,
)
from kiosk_locale.localization.local_string import LocalizedString
from kiosk_locale.localization.locale_table import LocaleTable
from kiosk_locale.localization.persistence import (
    JsonFilePreferences,
    LanguagePersistence,
    MemoryPreferences,
)
from kiosk_locale.localization.service import LocalizationService, create_localization_service
from kiosk_locale.localization.store import IngestResult, IngestStatus, LocalizationStore
from kiosk_locale.localization.table_parser import parse

__all__ = [
    "AlreadyInitializedError",
    "IngestResult",
    "IngestStatus",
    "JsonFilePreferences",
    "Language",
    "LanguagePersistence",
    "LanguageResolver",
    "LanguageState",
    "LocaleTable",
    "LocalizationError",
    "LocalizationService",
    "LocalizationStore",
    "LocalizedString",
    "MemoryPreferences",
    "UnsupportedLanguageError",
    "create_localization_service",
    "default_resolver",
    "detect_system_language",
    "parse",
]
