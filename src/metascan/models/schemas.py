"""metascan — Result schemas.

One set of objects per scoring call; nothing here is shared between calls.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from metascan.models.enums import ConfidenceLevel, RiskLevel, RuleWeight


class RuleResult(BaseModel):
    """Outcome of one detector."""

    model_config = ConfigDict(frozen=True)

    key: str
    category: str
    detected: bool
    points: int = Field(0, ge=0)
    weight: RuleWeight
    description: str
    evidence: str

    @model_validator(mode="after")
    def _points_only_when_detected(self) -> RuleResult:
        if self.points > 0 and not self.detected:
            raise ValueError(f"rule {self.key!r} carries points without being detected")
        return self


class CoOccurrenceBonus(BaseModel):
    """Extra points for a fixed combination of detected rules."""

    model_config = ConfigDict(frozen=True)

    key: str
    combination: str
    detected: bool
    points: int = Field(0, ge=0)
    description: str
    constituents: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _points_only_when_detected(self) -> CoOccurrenceBonus:
        if self.points > 0 and not self.detected:
            raise ValueError(f"bonus {self.key!r} carries points without being detected")
        return self


class ScoreResult(BaseModel):
    """Terminal verdict of one scoring call."""

    model_config = ConfigDict(frozen=True)

    total_score: int
    adjusted_score: int
    display_score: int
    level: int = Field(ge=0, le=3)
    risk_level: RiskLevel
    classification: str
    confidence_level: ConfidenceLevel
    recommendation: str
    is_digital_transport: bool = False
    transport_reasons: tuple[str, ...] = ()
    has_strong_c2pa: bool = False
    make: str | None = None
    model: str | None = None
    capture_date: str | None = None
    rules: tuple[RuleResult, ...] = ()
    bonuses: tuple[CoOccurrenceBonus, ...] = ()
    positive_signals: tuple[str, ...] = ()
    risk_signals: tuple[str, ...] = ()
    explanation: str = ""

    @property
    def detected_rules(self) -> list[RuleResult]:
        """Rules worth displaying: detected or carrying points."""
        return [r for r in self.rules if r.detected or r.points > 0]

    @property
    def applied_bonuses(self) -> list[CoOccurrenceBonus]:
        return [b for b in self.bonuses if b.detected]

    def rule(self, key: str) -> RuleResult | None:
        for r in self.rules:
            if r.key == key:
                return r
        return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
