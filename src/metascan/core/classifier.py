"""metascan — Risk classifier and explainer.

Pure threshold lookup over the adjusted score:
  score <= low_max       → level 0 (low)
  score <= moderate_max  → level 1 (moderate)
  score <= high_max      → level 2 (high / "strong")
  otherwise              → level 3 (very high / "very strong")
Boundary values resolve to the lower tier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from metascan.models.enums import ConfidenceLevel, RiskLevel
from metascan.scoring_config import ThresholdTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    level: int
    risk_level: RiskLevel
    label: str
    classification: str
    confidence_level: ConfidenceLevel
    recommendation: str


_TIERS = {
    0: (
        RiskLevel.LOW,
        "Low",
        "Low (normal)",
        "Image characteristics are consistent with an original capture.",
    ),
    1: (
        RiskLevel.MODERATE,
        "Moderate",
        "Moderate (moderate suspicion)",
        "Review the flagged manipulation signals.",
    ),
    2: (
        RiskLevel.HIGH,
        "Strong",
        "Strong (suspicious)",
        "Further technical analysis advised: multiple alteration indicators.",
    ),
    3: (
        RiskLevel.VERY_HIGH,
        "Very Strong",
        "Very Strong (probable fraud)",
        "High probability of manipulation: forensic investigation advised.",
    ),
}

_NARRATIVE = {
    0: "File shows the normal characteristics of an original capture.",
    1: "Isolated indicators, or compatible with digital compression/transport.",
    2: "Consistent set of technical indicators of manipulation.",
    3: "Multiple technical indicators point to a high probability of manipulation.",
}


def level_for(score: int, thresholds: ThresholdTable) -> int:
    if score <= thresholds.low_max:
        return 0
    if score <= thresholds.moderate_max:
        return 1
    if score <= thresholds.high_max:
        return 2
    return 3


def classify(score: int, thresholds: ThresholdTable, is_digital_transport: bool = False) -> Classification:
    level = level_for(score, thresholds)
    risk, label, classification, recommendation = _TIERS[level]
    if level == 3:
        confidence = ConfidenceLevel.VERY_HIGH
    elif level == 1 and is_digital_transport:
        confidence = ConfidenceLevel.MODERATE
    else:
        confidence = ConfidenceLevel.HIGH
    return Classification(
        level=level,
        risk_level=risk,
        label=label,
        classification=classification,
        confidence_level=confidence,
        recommendation=recommendation,
    )


def explain(adjusted_score: int, total_score: int, level: int, is_digital_transport: bool, bonus_count: int) -> str:
    parts = [f"Total score: {total_score} points."]
    if is_digital_transport:
        if adjusted_score < total_score:
            parts.append(f"Pattern consistent with digital transport (messaging apps); score capped at {adjusted_score}.")
        else:
            parts.append("Pattern consistent with digital transport (messaging apps); no cap needed.")
    if bonus_count:
        parts.append(f"{bonus_count} co-occurrence pattern(s) reinforce the indicators.")
    parts.append(_NARRATIVE[level])
    return " ".join(parts)
