#!/usr/bin/env python3
"""Centralized event types for the localization runtime.

All event types are defined here to avoid ad-hoc string events.
"""

from enum import Enum, auto

__all__ = ["EventType"]


class EventType(Enum):
    """All possible events in the system."""

    # Language events
    LANGUAGE_CHANGED = auto()

    # Source loading events
    LOCALE_SOURCE_LOADED = auto()  # One source fetched and ingested
    LOCALE_SOURCE_FAILED = auto()  # One source could not be fetched
    LOCALES_READY = auto()  # Every expected source has completed

    # System events
    SHUTDOWN = auto()
