"""Test configuration loading."""

import pytest
from pydantic import ValidationError

from kiosk_locale.core.config_loader import (
    get_nested,
    load_config,
    override_from_args,
    set_nested,
)
from kiosk_locale.core.config_schema import validate_config


@pytest.fixture(autouse=True)
def default_env(monkeypatch):
    monkeypatch.delenv("KIOSK_LOCALE_ENV", raising=False)


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "envs").mkdir()
    (tmp_path / "base.yaml").write_text(
        "localization:\n"
        "  default_language: en\n"
        "  supported_languages: [en, ru, de]\n"
        "sources:\n"
        "  location: locales\n"
        "logging:\n"
        "  level: info\n",
        encoding="utf-8",
    )
    return tmp_path


def test_config_parses(project_dir):
    """Test that base.yaml parses correctly."""
    cfg = load_config(project_dir / "config" / "base.yaml")
    assert isinstance(cfg, dict)
    for key in ["localization", "sources", "preferences", "logging"]:
        assert key in cfg, f"Missing required config key: {key}"


def test_localization_config_structure(project_dir):
    cfg = load_config(project_dir / "config" / "base.yaml")
    loc = cfg["localization"]
    assert loc["default_language"] == "en"
    assert loc["supported_languages"] == ["en", "ru"]
    assert loc["persist_key"] == "localization_lang_persist"
    assert cfg["sources"]["kind"] == "file"


def test_defaults_fill_missing_sections(config_dir):
    cfg = load_config(config_dir / "base.yaml")
    assert cfg["sources"]["manifest"] == "manifest"
    assert cfg["sources"]["max_workers"] == 2
    assert cfg["preferences"]["file"] is None
    assert cfg["logging"]["level"] == "INFO"


def test_environment_override(config_dir, monkeypatch):
    (config_dir / "envs" / "kiosk.yaml").write_text(
        "sources:\n"
        "  kind: http\n"
        "  location: ${LOCALE_URL}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("KIOSK_LOCALE_ENV", "kiosk")
    monkeypatch.setenv("LOCALE_URL", "https://cdn.example.test/locales")

    cfg = load_config(config_dir / "base.yaml")

    assert cfg["sources"]["kind"] == "http"
    assert cfg["sources"]["location"] == "https://cdn.example.test/locales"
    # Untouched keys survive the merge
    assert cfg["localization"]["supported_languages"] == ["en", "ru", "de"]


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "raw",
    [
        {"localization": {"supported_languages": []}},
        {"sources": {"kind": "ftp"}},
        {"sources": {"timeout": 0}},
        {"logging": {"level": "LOUD"}},
    ],
)
def test_invalid_config_rejected(raw):
    with pytest.raises(ValidationError):
        validate_config(raw)


def test_nested_helpers():
    cfg = {}
    set_nested(cfg, "sources.kind", "http")
    assert cfg == {"sources": {"kind": "http"}}
    assert get_nested(cfg, "sources.kind") == "http"
    assert get_nested(cfg, "sources.location", default="locales") == "locales"


def test_override_from_args(config_dir):
    class Args:
        sources = "/srv/locales"
        http = False
        log_level = "debug"

    cfg = load_config(config_dir / "base.yaml")
    override_from_args(cfg, Args())

    assert cfg["sources"]["location"] == "/srv/locales"
    assert cfg["sources"]["kind"] == "file"
    assert cfg["logging"]["level"] == "DEBUG"
