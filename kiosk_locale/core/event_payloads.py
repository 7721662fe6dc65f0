"""Typed event payload definitions."""

from typing import TypedDict


class LanguageChangedPayload(TypedDict):
    """Payload for language change events."""

    old: str
    new: str


class LocaleSourcePayload(TypedDict, total=False):
    """Payload for per-source loading events."""

    source: str
    languages: list[str]
    error: str


class LocalesReadyPayload(TypedDict):
    """Payload for the ready transition."""

    sources: int
    failed: int
    languages: list[str]


class ShutdownPayload(TypedDict):
    """Payload for loader shutdown."""

    pending: int  # Sources still outstanding when the pool stopped


__all__ = [
    "LanguageChangedPayload",
    "LocaleSourcePayload",
    "LocalesReadyPayload",
    "ShutdownPayload",
]
