"""Configuration schema validation using Pydantic."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocalizationSection(BaseModel):
    """Language selection configuration."""

    default_language: str | None = "en"
    supported_languages: list[str] = Field(default_factory=lambda: ["en"])
    persist_key: str = "localization_lang_persist"
    language_aliases: dict[str, str] = Field(default_factory=dict)

    @field_validator("supported_languages")
    @classmethod
    def validate_supported(cls, v):
        """Validate at least one language is supported."""
        if not v:
            raise ValueError("At least one supported language is required")
        return v


class SourcesConfig(BaseModel):
    """Locale source configuration."""

    kind: Literal["file", "http"] = "file"
    location: str = "locales"
    manifest: str = "manifest"
    timeout: float = Field(default=10.0, gt=0)
    max_workers: int = Field(default=2, ge=1, le=16)


class PreferencesConfig(BaseModel):
    """Language preference persistence configuration."""

    file: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v


class LocaleAppConfig(BaseModel):
    """Top-level configuration."""

    model_config = ConfigDict(extra="allow")

    localization: LocalizationSection = Field(default_factory=LocalizationSection)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(config_dict: dict[str, Any]) -> LocaleAppConfig:
    """Validate configuration dictionary.

    Args:
        config_dict: Raw configuration dictionary from YAML

    Returns:
        Validated LocaleAppConfig object

    Raises:
        ValidationError: If configuration is invalid
    """
    return LocaleAppConfig(**config_dict)


def config_to_dict(config: LocaleAppConfig) -> dict[str, Any]:
    """Convert LocaleAppConfig back to dictionary."""
    return config.model_dump()
