"""
Pydantic models for validated financial analysis results.

Field names follow Python conventions; the camelCase names used on the wire
are exposed as aliases so that ``model_validate`` accepts the Gemini payload
directly and ``model_dump(by_alias=True)`` reproduces it.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ledgerlens.core.errors import FailureReason

MAX_FINANCIAL_ITEMS = 40

LiquidityStatus = Literal["Healthy", "Caution", "Critical"]
ItemType = Literal["revenue", "expense", "asset", "liability"]
RiskLevel = Literal["High", "Medium", "Low"]
Evaluation = Literal["Good", "Fair", "Poor"]
Impact = Literal["Positive", "Negative", "Neutral"]


class ContractModel(BaseModel):
    """Base for models that mirror the response contract."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class LiquidityAnalysis(ContractModel):
    current_ratio: float
    quick_ratio: float
    status: LiquidityStatus
    status_label: str
    description: str


class FinancialItem(ContractModel):
    """One account line, attributed to an organizational unit."""

    name: str
    amount: float
    previous_amount: Optional[float] = Field(
        None, description="Prior-period amount when the source shows one."
    )
    percentage_change: Optional[float] = Field(
        None, description="Year-over-year change in percent."
    )
    type: ItemType
    unit: str = Field(
        ...,
        description="Owning unit, e.g. 'Electricity', 'BusA', 'BA', 'Central' or 'Overall'.",
    )
    insight: str
    risk_level: RiskLevel


class KeyRatio(ContractModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    value: str
    unit: Optional[str] = None
    evaluation: Evaluation
    description: str


class FutureTrend(ContractModel):
    topic: str
    prediction: str
    impact: Impact


class AnalysisResult(ContractModel):
    """Validated output of one successful analysis call."""

    liquidity: LiquidityAnalysis
    financial_items: List[FinancialItem] = Field(..., max_length=MAX_FINANCIAL_ITEMS)
    key_ratios: List[KeyRatio]
    future_trends: List[FutureTrend]
    summary: str
    detailed_report: str = Field(..., description="Long-form markdown narrative.")
    recommendations: List[str]


class AnalysisFailure(BaseModel):
    """Terminal failure of an analysis attempt, ready for display."""

    model_config = ConfigDict(frozen=True)

    reason: FailureReason
    message: str


__all__ = [
    "AnalysisFailure",
    "AnalysisResult",
    "FinancialItem",
    "FutureTrend",
    "KeyRatio",
    "LiquidityAnalysis",
    "MAX_FINANCIAL_ITEMS",
]
