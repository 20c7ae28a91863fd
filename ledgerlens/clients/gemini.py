"""Client wrapper for interacting with Google Gemini models."""

from __future__ import annotations

import asyncio
import base64
import logging
import re
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPICallError, RetryError
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from ledgerlens.core.config import GeminiSettings
from ledgerlens.core.errors import ConfigurationMissingError, TransportFailureError
from ledgerlens.schemas import (
    ContentPart,
    GenerationRequest,
    GenerationResponse,
    InlineBinary,
)

logger = logging.getLogger(__name__)

_SAFETY_CATEGORIES: tuple[HarmCategory, ...] = (
    HarmCategory.HARM_CATEGORY_HARASSMENT,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)

_SIZE_OR_POSITION_ERROR = re.compile(
    r"position \d+|unexpected token|unterminated|payload|too large|request entity"
    r"|exceeds|token count|size limit",
    re.IGNORECASE,
)

MISSING_KEY_MESSAGE = (
    "GEMINI_API_KEY is not configured. Set it in the environment or .env file."
)


def describe_transport_error(message: str) -> str:
    """Return a user-facing message for a failed generation call."""
    if _SIZE_OR_POSITION_ERROR.search(message):
        return (
            f"The analysis request failed ({message}). The document may be too "
            "large; try reducing the file size or the number of pages."
        )
    return f"The analysis request failed: {message}"


def to_sdk_part(part: ContentPart) -> Dict[str, Any]:
    if isinstance(part, InlineBinary):
        return {
            "inline_data": {
                "mime_type": part.mime_type,
                "data": base64.b64decode(part.data),
            }
        }
    return {"text": part.text}


def _enum_name(value: Any) -> Optional[str]:
    """Return an SDK enum's name, treating unspecified values as absent."""
    if value is None:
        return None
    name = getattr(value, "name", None) or str(value)
    if not value or name.endswith("UNSPECIFIED"):
        return None
    return name


def extract_response(response: Any) -> GenerationResponse:
    """Reduce an SDK response to text plus finish and block reasons.

    ``response.text`` raises when the candidate has no parts, so the parts are
    read directly instead.
    """
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = _enum_name(getattr(feedback, "block_reason", None))

    candidates = list(getattr(response, "candidates", None) or [])
    if not candidates:
        return GenerationResponse(block_reason=block_reason)

    candidate = candidates[0]
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []
    text = "".join(getattr(part, "text", "") or "" for part in parts)
    return GenerationResponse(
        text=text or None,
        finish_reason=_enum_name(getattr(candidate, "finish_reason", None)),
        block_reason=block_reason,
    )


class GeminiClient:
    """Issue schema-constrained generation calls against one credential."""

    def __init__(self, settings: GeminiSettings) -> None:
        if not settings.api_key:
            raise ConfigurationMissingError(MISSING_KEY_MESSAGE)
        self._settings = settings
        # Configure the global client once per process.
        genai.configure(api_key=settings.api_key)

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Run one generation call without blocking the event loop."""

        def _invoke() -> Any:
            model = genai.GenerativeModel(
                request.model_name,
                generation_config=genai.GenerationConfig(
                    temperature=request.temperature,
                    max_output_tokens=request.max_output_tokens,
                    response_mime_type=request.response_mime_type,
                    response_schema=request.response_schema,
                ),
                safety_settings=self._safety_settings(request.safety_threshold),
            )
            return model.generate_content(
                [{"role": "user", "parts": self._sdk_parts(request.parts)}],
                request_options={"timeout": self._settings.request_timeout_seconds},
            )

        try:
            response = await asyncio.to_thread(_invoke)
        except (GoogleAPICallError, RetryError, OSError) as exc:
            message = getattr(exc, "message", None) or str(exc)
            logger.error("Gemini generate_content failed: %s", message)
            raise TransportFailureError(describe_transport_error(message)) from exc

        result = extract_response(response)
        logger.info(
            "Gemini responded (model=%s, finish_reason=%s, chars=%d)",
            request.model_name,
            result.finish_reason,
            len(result.text or ""),
        )
        return result

    @staticmethod
    def _sdk_parts(parts: List[ContentPart]) -> List[Dict[str, Any]]:
        return [to_sdk_part(part) for part in parts]

    @staticmethod
    def _safety_settings(threshold: str) -> Dict[HarmCategory, HarmBlockThreshold]:
        level = HarmBlockThreshold[threshold]
        return {category: level for category in _SAFETY_CATEGORIES}


__all__ = [
    "GeminiClient",
    "describe_transport_error",
    "extract_response",
    "to_sdk_part",
]
