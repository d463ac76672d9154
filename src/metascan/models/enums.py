"""metascan — Enumerations shared across the scoring engine."""

from __future__ import annotations

from enum import Enum


class RuleWeight(str, Enum):
    """Human-facing severity tier of a rule (independent of its points)."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very_strong"


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"

    @property
    def ordinal(self) -> int:
        return _RISK_ORDER.index(self)


_RISK_ORDER = [RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH, RiskLevel.VERY_HIGH]


class ConfidenceLevel(str, Enum):
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class EditorConfidence(str, Enum):
    """How directly a metadata field names an editing tool."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
