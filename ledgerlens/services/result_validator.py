"""Turn raw Gemini output into a validated ``AnalysisResult``."""

from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError

from ledgerlens.core.errors import (
    ContentBlockedError,
    EmptyResponseError,
    MalformedResponseError,
)
from ledgerlens.schemas import AnalysisResult, GenerationResponse

logger = logging.getLogger(__name__)

SAFETY_FINISH_REASONS = frozenset(
    {"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII", "IMAGE_SAFETY"}
)

TRUNCATION_HINT = (
    "The response may have been cut off because it exceeded the output size "
    "limit; try a smaller document or fewer pages."
)

_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence wrapping the whole payload, if present."""
    stripped = text.strip()
    match = _FENCE_PATTERN.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def _summarize_validation_error(exc: ValidationError, limit: int = 5) -> str:
    details = []
    for error in exc.errors()[:limit]:
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        details.append(f"{location}: {error['msg']}")
    remaining = exc.error_count() - len(details)
    if remaining > 0:
        details.append(f"... and {remaining} more")
    return "; ".join(details)


class ResultValidator:
    """Validate and clean the textual response against the response contract."""

    def validate(self, response: GenerationResponse) -> AnalysisResult:
        text = (response.text or "").strip()
        if not text:
            self._raise_for_missing_text(response)

        cleaned = strip_code_fence(text)
        try:
            payload = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            logger.warning(
                "Unparseable analysis payload (%d chars, finish_reason=%s): %s",
                len(cleaned),
                response.finish_reason,
                exc,
            )
            raise MalformedResponseError(
                f"The analysis response is not valid JSON ({exc}). {TRUNCATION_HINT}"
            ) from exc

        try:
            return AnalysisResult.model_validate(payload)
        except ValidationError as exc:
            summary = _summarize_validation_error(exc)
            logger.warning("Analysis payload violates the contract: %s", summary)
            raise MalformedResponseError(
                f"The analysis response does not match the expected structure ({summary}). "
                f"{TRUNCATION_HINT}"
            ) from exc

    @staticmethod
    def _raise_for_missing_text(response: GenerationResponse) -> None:
        if response.block_reason or response.finish_reason in SAFETY_FINISH_REASONS:
            reason = response.block_reason or response.finish_reason
            raise ContentBlockedError(
                f"The content was blocked by the model's safety filters (reason: {reason})."
            )
        reason = response.finish_reason or "UNKNOWN"
        raise EmptyResponseError(
            f"No response was returned by the model (reason: {reason}).",
            finish_reason=response.finish_reason,
        )


__all__ = [
    "ResultValidator",
    "SAFETY_FINISH_REASONS",
    "TRUNCATION_HINT",
    "strip_code_fence",
]
