"""State holder backing an upload form: selection, progress and result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ledgerlens.core.errors import FailureReason, FileTooLargeError
from ledgerlens.schemas import (
    AnalysisFailure,
    AnalysisResult,
    UploadedArtifact,
    UploadedFile,
)

from .analysis import AnalysisOutcome, FinancialAnalysisService
from .normalizer import ArtifactKind, FormatNormalizer, classify
from .request_builder import INPUT_MISSING_MESSAGE

logger = logging.getLogger(__name__)


class UploadStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"


class AnalysisInProgressError(RuntimeError):
    """Raised when a new attempt starts before the previous one resolved."""


@dataclass(slots=True, frozen=True)
class PrecheckResult:
    """Outcome of the size/type check performed when a file is selected."""

    accepted: bool
    kind: Optional[ArtifactKind] = None
    message: Optional[str] = None


class UploadSession:
    """Track one user's upload form across analysis attempts.

    Status moves ``idle -> uploading -> success | error``; ``reset`` discards
    the selection, pasted text, result and error.
    """

    def __init__(self, normalizer: FormatNormalizer) -> None:
        self._normalizer = normalizer
        self._in_flight = False
        self.status = UploadStatus.IDLE
        self.file: Optional[UploadedFile] = None
        self.text = ""
        self.result: Optional[AnalysisResult] = None
        self.error_message: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def select_file(self, file: UploadedFile) -> PrecheckResult:
        """Pre-check and retain ``file``; oversized files leave the selection unchanged."""
        try:
            self._normalizer.check_size(file)
        except FileTooLargeError as exc:
            logger.info("Rejected %r at selection: %s", file.filename, exc.message)
            return PrecheckResult(accepted=False, message=exc.message)

        self.file = file
        return PrecheckResult(accepted=True, kind=classify(file.filename, file.mime_type))

    def set_text(self, text: str) -> None:
        self.text = text or ""

    async def run(self, service: FinancialAnalysisService) -> AnalysisOutcome:
        if self._in_flight:
            raise AnalysisInProgressError("An analysis is already in progress.")

        artifact = UploadedArtifact(file=self.file, text=self.text.strip() or None)
        if artifact.is_empty:
            self.status = UploadStatus.ERROR
            self.error_message = INPUT_MISSING_MESSAGE
            return AnalysisFailure(
                reason=FailureReason.INPUT_MISSING, message=INPUT_MISSING_MESSAGE
            )

        self._in_flight = True
        self.status = UploadStatus.UPLOADING
        self.error_message = None
        try:
            outcome = await service.analyze(artifact)
        except Exception as exc:
            self.status = UploadStatus.ERROR
            self.error_message = f"Unexpected error during analysis: {exc}"
            raise
        finally:
            self._in_flight = False

        if isinstance(outcome, AnalysisFailure):
            self.status = UploadStatus.ERROR
            self.error_message = outcome.message
        else:
            self.status = UploadStatus.SUCCESS
            self.result = outcome
        return outcome

    def reset(self) -> None:
        self.status = UploadStatus.IDLE
        self.file = None
        self.text = ""
        self.result = None
        self.error_message = None


__all__ = [
    "AnalysisInProgressError",
    "PrecheckResult",
    "UploadSession",
    "UploadStatus",
]
