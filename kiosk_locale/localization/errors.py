"""Localization error types."""


class LocalizationError(Exception):
    """Base class for localization errors."""


class UnsupportedLanguageError(LocalizationError, ValueError):
    """Raised when a language abbreviation cannot be resolved."""

    def __init__(self, abbreviation: str):
        super().__init__(f"The language '{abbreviation}' isn't supported.")
        self.abbreviation = abbreviation


class AlreadyInitializedError(LocalizationError, RuntimeError):
    """Raised when a loader or service is initialized twice."""
