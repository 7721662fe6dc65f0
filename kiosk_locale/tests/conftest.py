"""Pytest configuration."""

import sys
from pathlib import Path

import pytest

# Add project root to path (one level above the package)
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from kiosk_locale.localization import (  # noqa: E402
    Language,
    LanguageState,
    LocalizationStore,
    MemoryPreferences,
)

SAMPLE_TABLE = (
    "key,en,ru\n"
    "hello,Hello,Привет\n"
    "bye,Bye,\n"
    "score,Score: {0},Счёт: {0}\n"
    "pair,{0} and {1},{0} и {1}\n"
    "same,OK,OK\n"
    "multi,First\\nSecond,Первая\\nВторая\n"
)


@pytest.fixture
def project_dir() -> Path:
    return project_root


@pytest.fixture
def sample_table() -> str:
    return SAMPLE_TABLE


@pytest.fixture
def store(sample_table) -> LocalizationStore:
    store = LocalizationStore()
    store.ingest(sample_table)
    return store


@pytest.fixture
def preferences() -> MemoryPreferences:
    return MemoryPreferences()


@pytest.fixture
def state(preferences) -> LanguageState:
    return LanguageState(
        [Language.ENGLISH, Language.RUSSIAN],
        preferences,
        default_language=Language.ENGLISH,
        ambient_language=lambda: Language.ENGLISH,
    )
