"""Expose dependency helpers for presentation layers."""

from .clients import (
    get_analysis_service,
    get_format_normalizer,
    get_gemini_client,
    get_request_builder,
    new_upload_session,
    reset_dependency_cache,
)

__all__ = [
    "get_analysis_service",
    "get_format_normalizer",
    "get_gemini_client",
    "get_request_builder",
    "new_upload_session",
    "reset_dependency_cache",
]
