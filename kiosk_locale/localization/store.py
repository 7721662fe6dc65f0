"""Locale store: one LocaleTable per language, built from parsed tables.

Source layout::

    key,en,ru
    menu.start,Start,Старт
    menu.quit,"Quit, really?","Выйти?"

Row 0 names the language of each column after the key column. Later sources
merge over earlier ones key by key.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto

from kiosk_locale.core.logging_utils import setup_logger
from kiosk_locale.localization.languages import Language, default_resolver
from kiosk_locale.localization.locale_table import LocaleTable
from kiosk_locale.localization.table_parser import parse

__all__ = ["IngestResult", "IngestStatus", "LocalizationStore"]

logger = setup_logger(__name__)

# Translators write "\n" (two characters) inside a cell for a line break
_ESCAPED_LINE_BREAK = re.compile(r"\\r\\n|\\n")


class IngestStatus(Enum):
    OK = auto()
    NO_DATA = auto()


@dataclass(frozen=True)
class IngestResult:
    """Outcome of one ingest call."""

    status: IngestStatus
    languages: tuple[Language, ...] = field(default_factory=tuple)
    rows: int = 0
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is IngestStatus.OK

    @classmethod
    def no_data(cls, reason: str) -> "IngestResult":
        return cls(IngestStatus.NO_DATA, reason=reason)


class LocalizationStore:
    """Owns the LocaleTable of every loaded language."""

    def __init__(self, language_resolver: Callable[[str], Language] | None = None):
        """Initialize an empty store.

        Args:
            language_resolver: Header abbreviation -> Language; used when
                ingest() is not given one
        """
        self._resolver = language_resolver or default_resolver
        self._tables: dict[Language, LocaleTable] = {}

    @property
    def languages(self) -> tuple[Language, ...]:
        return tuple(self._tables)

    def table(self, language: Language) -> LocaleTable | None:
        return self._tables.get(language)

    def __contains__(self, language: object) -> bool:
        return language in self._tables

    def ingest(
        self,
        raw_table_text: str | None,
        language_resolver: Callable[[str], Language] | None = None,
        clear: bool = False,
    ) -> IngestResult:
        """Parse a raw table and merge it into the store.

        Args:
            raw_table_text: Whole table text, header first
            language_resolver: Overrides the store's resolver for this call
            clear: Drop tables for languages the new source does not declare

        Returns:
            IngestResult; NO_DATA when the source has no usable header or rows

        Raises:
            UnsupportedLanguageError: If a header abbreviation is unknown. The
                store is left untouched.
        """
        resolver = language_resolver or self._resolver
        records = list(parse(raw_table_text))

        if not records:
            logger.warning("Locale source is empty")
            return IngestResult.no_data("empty source")

        header = records[0]
        if len(header) < 2:
            logger.warning("Locale source header has no language columns")
            return IngestResult.no_data("header has fewer than 2 columns")

        rows = records[1:]
        if not rows:
            logger.warning("Locale source has no data rows")
            return IngestResult.no_data("no data rows")

        # Resolve every column before touching any table
        column_languages = [resolver(column) for column in header[1:]]

        incoming: dict[Language, LocaleTable] = {}
        for language in column_languages:
            incoming.setdefault(language, LocaleTable(language))
        columns = [incoming[language] for language in column_languages]

        applied = 0
        for record in rows:
            key = record[0]
            if not key:
                logger.debug(f"Skipping row without key: {record!r}")
                continue
            if len(record) > len(header):
                logger.debug(f"Row '{key}' has {len(record) - len(header)} extra columns")
            for table, value in zip(columns, record[1:]):
                table.set(key, value)
            applied += 1

        self._apply(incoming, clear)

        logger.info(
            f"Ingested {applied} rows for {', '.join(lang.name for lang in incoming)}"
        )
        return IngestResult(IngestStatus.OK, tuple(incoming), applied)

    def merge_from(self, other: "LocalizationStore", clear: bool = False):
        """Merge every table of another store into this one.

        Args:
            other: Source store (not modified)
            clear: Drop tables for languages the other store does not have
        """
        incoming: dict[Language, LocaleTable] = {}
        for language, table in other._tables.items():
            copy = LocaleTable(language)
            copy.merge(table)
            incoming[language] = copy
        self._apply(incoming, clear)

    def _apply(self, incoming: dict[Language, LocaleTable], clear: bool):
        if clear:
            for language in [lang for lang in self._tables if lang not in incoming]:
                del self._tables[language]
                logger.debug(f"Removed locale table for {language.name}")

        for language, table in incoming.items():
            existing = self._tables.get(language)
            if existing is None:
                self._tables[language] = table
            else:
                existing.merge(table)

    def get_localized(self, key: str, language: Language) -> str:
        """Resolve a key for a language.

        Missing languages and missing or empty values resolve to the key.
        Escaped line-break tokens in the stored text become real newlines.
        """
        table = self._tables.get(language)
        if table is None:
            return key

        value = table.raw(key)
        if not value:
            return key
        return _ESCAPED_LINE_BREAK.sub("\n", value)

    def get_all_translations(self, key: str) -> dict[Language, str]:
        """Resolve a key for every loaded language."""
        # Pool threads may add tables while loading
        return {language: self.get_localized(key, language) for language in tuple(self._tables)}

    def clear(self):
        self._tables.clear()
