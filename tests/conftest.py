"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import copy

import pytest

from ledgerlens.core.config import AnalysisSettings, GeminiSettings

_ANALYSIS_PAYLOAD = {
    "liquidity": {
        "currentRatio": 1.85,
        "quickRatio": 1.2,
        "status": "Healthy",
        "statusLabel": "Strong liquidity",
        "description": "Current assets comfortably cover current liabilities.",
    },
    "financialItems": [
        {
            "name": "Revenue",
            "amount": 100,
            "previousAmount": 80,
            "percentageChange": 25.0,
            "type": "revenue",
            "unit": "Overall",
            "insight": "Ticket sales grew on new routes.",
            "riskLevel": "Low",
        },
        {
            "name": "Expense",
            "amount": 40,
            "type": "expense",
            "unit": "Electricity",
            "insight": "Energy tariffs rose mid-year.",
            "riskLevel": "Medium",
        },
    ],
    "keyRatios": [
        {
            "name": "Net margin",
            "value": "60",
            "unit": "%",
            "evaluation": "Good",
            "description": "Well above the sector median.",
        }
    ],
    "futureTrends": [
        {
            "topic": "Revenue",
            "prediction": "Growth continues while route expansion holds.",
            "impact": "Positive",
        }
    ],
    "summary": "Profitable with healthy liquidity.",
    "detailedReport": "## Overview\n\nRevenue rose 25% year over year.",
    "recommendations": ["Hedge electricity costs", "Review route profitability"],
}


@pytest.fixture
def analysis_payload() -> dict:
    """A response payload that satisfies the response contract."""
    return copy.deepcopy(_ANALYSIS_PAYLOAD)


@pytest.fixture
def analysis_settings() -> AnalysisSettings:
    return AnalysisSettings(max_file_size_mb=10, max_text_chars=50_000, output_language="Thai")


@pytest.fixture
def gemini_settings() -> GeminiSettings:
    return GeminiSettings(api_key="test-gemini-key", model_name="gemini-2.5-flash")
