"""
Application configuration models and helpers.

Centralizes settings management so the analysis pipeline and any presentation
layer built on top of it share a consistent configuration surface. Each model
reads its own environment prefix, e.g. ``GEMINI_API_KEY`` or
``ANALYSIS_MAX_TEXT_CHARS``.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_config(prefix: str) -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access."""

    model_config = _env_config("GEMINI_")

    api_key: Optional[str] = None
    model_name: str = "gemini-2.5-flash"
    temperature: float = Field(
        0.2,
        ge=0.0,
        le=2.0,
        description="Low values favour consistent, repeatable analyses.",
    )
    max_output_tokens: int = Field(32768, gt=0)
    request_timeout_seconds: float = Field(300, gt=0)

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AnalysisSettings(BaseSettings):
    """Limits applied while preparing documents for analysis."""

    model_config = _env_config("ANALYSIS_")

    max_file_size_mb: float = Field(10, gt=0)
    max_text_chars: int = Field(
        50_000,
        gt=0,
        description="Ceiling for text derived from spreadsheets, files or pasted input.",
    )
    output_language: str = "Thai"

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)


class AppSettings(BaseSettings):
    """Root settings object for the analysis package."""

    model_config = _env_config("APP_")

    log_level: str = "INFO"
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AnalysisSettings",
    "AppSettings",
    "GeminiSettings",
    "get_settings",
]
