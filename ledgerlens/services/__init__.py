"""Service layer exports."""

from .analysis import AnalysisOutcome, FinancialAnalysisService
from .normalizer import ArtifactKind, FormatNormalizer, classify
from .request_builder import RequestBuilder
from .result_validator import ResultValidator
from .upload_session import (
    AnalysisInProgressError,
    PrecheckResult,
    UploadSession,
    UploadStatus,
)

__all__ = [
    "AnalysisInProgressError",
    "AnalysisOutcome",
    "ArtifactKind",
    "FinancialAnalysisService",
    "FormatNormalizer",
    "PrecheckResult",
    "RequestBuilder",
    "ResultValidator",
    "UploadSession",
    "UploadStatus",
    "classify",
]
