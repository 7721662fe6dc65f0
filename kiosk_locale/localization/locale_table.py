"""Per-language key -> text table."""

from collections.abc import Iterator

from kiosk_locale.localization.languages import Language


class LocaleTable:
    """Translated strings for a single language.

    Lookups never fail: a missing key or an empty value resolves to the key
    itself, which shows up on screen as a visible "untranslated" marker.
    """

    def __init__(self, language: Language):
        self._language = language
        self._entries: dict[str, str] = {}

    @property
    def language(self) -> Language:
        return self._language

    def set(self, key: str, value: str):
        """Insert or overwrite the text for a key."""
        self._entries[key] = value

    def get(self, key: str) -> str:
        """Return the text for a key, or the key when missing or empty."""
        value = self._entries.get(key)
        return value if value else key

    def raw(self, key: str) -> str | None:
        """Return the stored text for a key without fallback."""
        return self._entries.get(key)

    def merge(self, other: "LocaleTable"):
        """Copy every entry of another table over this one.

        Keys only present here survive; keys present in both take the other
        table's value.
        """
        self._entries.update(other._entries)

    def clear(self):
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LocaleTable({self._language.name}, {len(self._entries)} entries)"
