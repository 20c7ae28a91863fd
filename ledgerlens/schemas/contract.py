"""Response schema handed to Gemini for every analysis request."""

from __future__ import annotations

import copy
from typing import Any, Dict

from .analysis import MAX_FINANCIAL_ITEMS

_RESPONSE_CONTRACT: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "liquidity": {
            "type": "OBJECT",
            "properties": {
                "currentRatio": {"type": "NUMBER"},
                "quickRatio": {"type": "NUMBER"},
                "status": {
                    "type": "STRING",
                    "enum": ["Healthy", "Caution", "Critical"],
                },
                "statusLabel": {"type": "STRING"},
                "description": {"type": "STRING"},
            },
            "required": [
                "currentRatio",
                "quickRatio",
                "status",
                "statusLabel",
                "description",
            ],
        },
        "financialItems": {
            "type": "ARRAY",
            "description": (
                f"The {MAX_FINANCIAL_ITEMS} most significant account lines, one entry "
                "per line as it appears in the statement."
            ),
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "amount": {"type": "NUMBER"},
                    "previousAmount": {
                        "type": "NUMBER",
                        "description": "Prior-year amount, when available.",
                    },
                    "percentageChange": {
                        "type": "NUMBER",
                        "description": "Year-over-year change in percent, when available.",
                    },
                    "type": {
                        "type": "STRING",
                        "enum": ["revenue", "expense", "asset", "liability"],
                    },
                    "unit": {
                        "type": "STRING",
                        "description": (
                            "Owning unit, e.g. 'Electricity', 'BusA', 'BA', 'Central' "
                            "or 'Overall'."
                        ),
                    },
                    "insight": {
                        "type": "STRING",
                        "description": "Short cause or observation for this line.",
                    },
                    "riskLevel": {
                        "type": "STRING",
                        "enum": ["High", "Medium", "Low"],
                    },
                },
                "required": ["name", "amount", "type", "unit", "insight", "riskLevel"],
            },
        },
        "keyRatios": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "value": {"type": "STRING"},
                    "unit": {"type": "STRING"},
                    "evaluation": {
                        "type": "STRING",
                        "enum": ["Good", "Fair", "Poor"],
                    },
                    "description": {"type": "STRING"},
                },
                "required": ["name", "value", "evaluation", "description"],
            },
        },
        "futureTrends": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "topic": {"type": "STRING"},
                    "prediction": {"type": "STRING"},
                    "impact": {
                        "type": "STRING",
                        "enum": ["Positive", "Negative", "Neutral"],
                    },
                },
                "required": ["topic", "prediction", "impact"],
            },
        },
        "summary": {"type": "STRING"},
        "detailedReport": {
            "type": "STRING",
            "description": (
                "In-depth markdown narrative covering notable increases, decreases "
                "and anomalies."
            ),
        },
        "recommendations": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": [
        "liquidity",
        "financialItems",
        "keyRatios",
        "futureTrends",
        "summary",
        "detailedReport",
        "recommendations",
    ],
}


def response_contract() -> Dict[str, Any]:
    """Return a private copy of the response schema.

    The Gemini SDK rewrites schema dictionaries in place while converting them,
    so every request gets its own copy.
    """
    return copy.deepcopy(_RESPONSE_CONTRACT)


__all__ = ["response_contract"]
