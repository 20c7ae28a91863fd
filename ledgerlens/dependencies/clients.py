"""
Factory functions providing shared clients and services to a presentation layer.
"""

from functools import lru_cache

from ledgerlens.clients import GeminiClient
from ledgerlens.core.config import get_settings
from ledgerlens.core.logging import configure_logging
from ledgerlens.services import (
    FinancialAnalysisService,
    FormatNormalizer,
    RequestBuilder,
    UploadSession,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings and configure logging once."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return settings


@lru_cache()
def get_gemini_client() -> GeminiClient | None:
    """Provide Gemini client instance when an API key is configured."""
    settings = _settings()
    if not settings.gemini.api_key:
        return None
    return GeminiClient(settings.gemini)


@lru_cache()
def get_format_normalizer() -> FormatNormalizer:
    return FormatNormalizer(_settings().analysis)


@lru_cache()
def get_request_builder() -> RequestBuilder:
    settings = _settings()
    return RequestBuilder(settings.gemini, settings.analysis)


def get_analysis_service() -> FinancialAnalysisService:
    """Build an analysis service using the configured Gemini client."""
    return FinancialAnalysisService(
        gemini_client=get_gemini_client(),
        normalizer=get_format_normalizer(),
        request_builder=get_request_builder(),
    )


def new_upload_session() -> UploadSession:
    """Create a fresh upload session; each user gets their own."""
    return UploadSession(get_format_normalizer())


def reset_dependency_cache() -> None:
    """Drop cached settings and clients, e.g. after the environment changed."""
    for factory in (
        _settings,
        get_gemini_client,
        get_format_normalizer,
        get_request_builder,
    ):
        factory.cache_clear()
    get_settings.cache_clear()


__all__ = [
    "get_analysis_service",
    "get_format_normalizer",
    "get_gemini_client",
    "get_request_builder",
    "new_upload_session",
    "reset_dependency_cache",
]
