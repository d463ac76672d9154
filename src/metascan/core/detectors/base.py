"""metascan — Detector contract.

A detector is a pure function ``(MetadataAccessor, ValidationConfig) -> Detection``.
It reports *whether* its condition holds and why; points are assigned afterwards
from the configured weight table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from metascan.core.accessor import MetadataAccessor
from metascan.models.enums import RuleWeight
from metascan.scoring_config import ValidationConfig


@dataclass(frozen=True)
class Detection:
    """Partial result of one detector."""

    detected: bool
    evidence: str
    positive: str | None = None  # authenticity signal when not detected
    weight_key: str | None = None  # overrides RuleSpec.weight_key (ICC tiers)
    units: int = 1  # multiplier for per-signal rules
    facts: frozenset[str] = frozenset()  # named findings surfaced on ScoreResult


def not_detected(evidence: str, positive: str | None = None) -> Detection:
    return Detection(detected=False, evidence=evidence, positive=positive)


DetectorFn = Callable[[MetadataAccessor, ValidationConfig], Detection]


@dataclass(frozen=True)
class RuleSpec:
    key: str
    category: str
    tier: RuleWeight
    description: str
    detector: DetectorFn

    def points_for(self, detection: Detection, config: ValidationConfig) -> int:
        if not detection.detected:
            return 0
        weight = getattr(config.weights, detection.weight_key or self.key)
        return max(0, weight * detection.units)
