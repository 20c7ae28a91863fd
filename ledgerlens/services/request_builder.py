"""Assemble the multi-part Gemini request for one analysis attempt."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ledgerlens.core.config import AnalysisSettings, GeminiSettings
from ledgerlens.core.errors import InputMissingError
from ledgerlens.prompts import render_instructions
from ledgerlens.schemas import (
    MAX_FINANCIAL_ITEMS,
    ContentPart,
    GenerationRequest,
    InlineText,
    response_contract,
)

INPUT_MISSING_MESSAGE = (
    "Please upload a file or enter text data before starting the analysis."
)


class RequestBuilder:
    """Prepend the analyst instructions and attach the response contract."""

    def __init__(
        self,
        gemini_settings: GeminiSettings,
        analysis_settings: AnalysisSettings,
    ) -> None:
        self._gemini = gemini_settings
        self._instructions = render_instructions(
            max_items=MAX_FINANCIAL_ITEMS,
            language=analysis_settings.output_language,
        )

    @property
    def instructions(self) -> str:
        return self._instructions

    def build(
        self,
        content_parts: Sequence[ContentPart],
        user_input: Optional[InlineText] = None,
    ) -> GenerationRequest:
        if not content_parts and user_input is None:
            raise InputMissingError(INPUT_MISSING_MESSAGE)

        parts: List[ContentPart] = [InlineText(text=self._instructions)]
        parts.extend(content_parts)
        if user_input is not None:
            parts.append(user_input)

        return GenerationRequest(
            parts=parts,
            response_schema=response_contract(),
            model_name=self._gemini.model_name,
            temperature=self._gemini.temperature,
            max_output_tokens=self._gemini.max_output_tokens,
            safety_threshold="BLOCK_NONE",
        )


__all__ = ["INPUT_MISSING_MESSAGE", "RequestBuilder"]
