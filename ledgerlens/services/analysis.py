"""Service that sequences normalization, generation and validation."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from ledgerlens.clients import GeminiClient
from ledgerlens.clients.gemini import MISSING_KEY_MESSAGE
from ledgerlens.core.errors import (
    AnalysisError,
    ConfigurationMissingError,
    InputMissingError,
)
from ledgerlens.schemas import AnalysisFailure, AnalysisResult, UploadedArtifact

from .normalizer import FormatNormalizer
from .request_builder import INPUT_MISSING_MESSAGE, RequestBuilder
from .result_validator import ResultValidator

logger = logging.getLogger(__name__)

AnalysisOutcome = Union[AnalysisResult, AnalysisFailure]


class FinancialAnalysisService:
    """Analyse one uploaded artifact with a single Gemini call.

    The injected client is the only collaborator that touches the network;
    normalization, request building and validation are pure transformations.
    """

    def __init__(
        self,
        *,
        gemini_client: Optional[GeminiClient],
        normalizer: FormatNormalizer,
        request_builder: RequestBuilder,
        validator: Optional[ResultValidator] = None,
    ) -> None:
        self._gemini = gemini_client
        self._normalizer = normalizer
        self._builder = request_builder
        self._validator = validator or ResultValidator()

    async def analyze(self, artifact: UploadedArtifact) -> AnalysisOutcome:
        try:
            return await self._run(artifact)
        except AnalysisError as exc:
            logger.warning("Analysis failed (%s): %s", exc.reason.value, exc.message)
            return AnalysisFailure(reason=exc.reason, message=exc.message)

    async def _run(self, artifact: UploadedArtifact) -> AnalysisResult:
        if artifact.is_empty:
            raise InputMissingError(INPUT_MISSING_MESSAGE)
        if self._gemini is None:
            raise ConfigurationMissingError(MISSING_KEY_MESSAGE)

        if artifact.file is not None:
            logger.info(
                "Analysing %r (%s, %d bytes)",
                artifact.file.filename,
                artifact.file.mime_type or "unknown type",
                artifact.file.size,
            )
            # Size is checked before any decoding is scheduled.
            self._normalizer.check_size(artifact.file)

        file_parts = await asyncio.to_thread(self._normalizer.normalize, artifact.file)
        user_input = self._normalizer.normalize_text(artifact.text)
        request = self._builder.build(file_parts, user_input)

        response = await self._gemini.generate(request)
        return self._validator.validate(response)


__all__ = ["AnalysisOutcome", "FinancialAnalysisService"]
