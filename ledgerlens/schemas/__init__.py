"""Public schema exports."""

from .analysis import (
    MAX_FINANCIAL_ITEMS,
    AnalysisFailure,
    AnalysisResult,
    FinancialItem,
    FutureTrend,
    KeyRatio,
    LiquidityAnalysis,
)
from .artifact import (
    ContentPart,
    GenerationRequest,
    GenerationResponse,
    InlineBinary,
    InlineText,
    UploadedArtifact,
    UploadedFile,
)
from .contract import response_contract

__all__ = [
    "MAX_FINANCIAL_ITEMS",
    "AnalysisFailure",
    "AnalysisResult",
    "ContentPart",
    "FinancialItem",
    "FutureTrend",
    "GenerationRequest",
    "GenerationResponse",
    "InlineBinary",
    "InlineText",
    "KeyRatio",
    "LiquidityAnalysis",
    "UploadedArtifact",
    "UploadedFile",
    "response_contract",
]
