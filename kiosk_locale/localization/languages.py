"""Language identifiers and abbreviation resolution.

Table headers name their columns with short abbreviations ("en", "ru_ru");
a LanguageResolver turns them into Language members. The numeric value of a
Language is what gets persisted as the user's last choice.
"""

import locale
import os
from collections.abc import Mapping
from enum import IntEnum

from kiosk_locale.localization.errors import UnsupportedLanguageError


class Language(IntEnum):
    """Languages known to the localization runtime."""

    UNKNOWN = 0
    ENGLISH = 1
    RUSSIAN = 2
    GERMAN = 3
    FRENCH = 4
    CHINESE = 5
    JAPANESE = 6
    SPANISH = 7

    @classmethod
    def from_value(cls, value: int) -> "Language | None":
        """Decode a persisted integer, or None if it names no language."""
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: str) -> "Language":
        """Look up a member by case-insensitive name ("english", "RUSSIAN")."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise UnsupportedLanguageError(name) from None


DEFAULT_ABBREVIATIONS: dict[str, Language] = {
    "en": Language.ENGLISH,
    "en_us": Language.ENGLISH,
    "ru": Language.RUSSIAN,
    "ru_ru": Language.RUSSIAN,
    "de": Language.GERMAN,
    "fr": Language.FRENCH,
    "ch": Language.CHINESE,
    "zh": Language.CHINESE,
    "jp": Language.JAPANESE,
    "ja": Language.JAPANESE,
    "es": Language.SPANISH,
}


class LanguageResolver:
    """Maps header abbreviations to Language members.

    Instances are callable, so a plain function with the same signature can be
    passed anywhere a resolver is expected.
    """

    def __init__(self, abbreviations: Mapping[str, Language] | None = None):
        source = DEFAULT_ABBREVIATIONS if abbreviations is None else abbreviations
        self._abbreviations = {k.lower(): Language(v) for k, v in source.items()}

    @classmethod
    def with_aliases(cls, aliases: Mapping[str, str]) -> "LanguageResolver":
        """Build a resolver from the defaults plus aliases naming Language members.

        Args:
            aliases: Abbreviation -> Language member name (e.g. {"en_gb": "english"})

        Raises:
            UnsupportedLanguageError: If an alias names no Language member
        """
        mapping = dict(DEFAULT_ABBREVIATIONS)
        for abbreviation, name in aliases.items():
            mapping[abbreviation] = Language.from_name(name)
        return cls(mapping)

    def __call__(self, abbreviation: str) -> Language:
        try:
            return self._abbreviations[abbreviation.strip().lower()]
        except KeyError:
            raise UnsupportedLanguageError(abbreviation) from None

    def abbreviation_of(self, language: Language) -> str:
        """Return the shortest abbreviation registered for a language."""
        candidates = [k for k, v in self._abbreviations.items() if v == language]
        if not candidates:
            return language.name.lower()
        return min(candidates, key=len)

    def __contains__(self, abbreviation: str) -> bool:
        return abbreviation.strip().lower() in self._abbreviations


default_resolver = LanguageResolver()


def detect_system_language(resolver: LanguageResolver | None = None) -> Language:
    """Best-effort ambient language of the host environment.

    Checks LC_ALL, LC_MESSAGES and LANG, then the process locale. Returns
    Language.ENGLISH when nothing recognizable is found.
    """
    resolver = resolver or default_resolver
    candidates = [os.environ.get(name) for name in ("LC_ALL", "LC_MESSAGES", "LANG")]
    try:
        candidates.append(locale.getlocale()[0])
    except ValueError:
        pass

    for candidate in candidates:
        if not candidate:
            continue
        code = candidate.split(".")[0].lower()  # "ru_RU.UTF-8" -> "ru_ru"
        for abbreviation in (code, code.split("_")[0]):
            if abbreviation in resolver:
                return resolver(abbreviation)

    return Language.ENGLISH
