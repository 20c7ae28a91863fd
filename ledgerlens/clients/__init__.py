"""Expose constructed client wrappers."""

from .gemini import GeminiClient

__all__ = ["GeminiClient"]
