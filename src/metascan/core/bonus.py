"""metascan — Co-occurrence bonus engine.

Evaluated strictly after every rule has run. A bonus adds its points only when:
  - every rule in ``requires`` was detected,
  - at least one rule in ``requires_any`` was detected (when given),
  - no rule in ``requires_absent`` was detected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from metascan.models.schemas import CoOccurrenceBonus, RuleResult
from metascan.scoring_config import ValidationConfig

logger = logging.getLogger(__name__)

TECHNICAL_RULES = ("progressive_encoding", "chroma_subsampling", "icc_profile", "editor_software")


@dataclass(frozen=True)
class BonusSpec:
    key: str
    combination: str
    description: str
    requires: tuple[str, ...] = ()
    requires_any: tuple[str, ...] = ()
    requires_absent: tuple[str, ...] = ()

    def holds(self, fired: set[str]) -> bool:
        if not all(k in fired for k in self.requires):
            return False
        if self.requires_any and not any(k in fired for k in self.requires_any):
            return False
        return not any(k in fired for k in self.requires_absent)

    def constituents(self, fired: set[str]) -> tuple[str, ...]:
        """Detected rules that satisfied this bonus."""
        return self.requires + tuple(k for k in self.requires_any if k in fired)


BONUSES: tuple[BonusSpec, ...] = (
    BonusSpec(
        "progressive_subsampling",
        "Progressive encoding + 4:4:4 subsampling",
        "Recompression typical of editing software",
        requires=("progressive_encoding", "chroma_subsampling"),
    ),
    BonusSpec(
        "icc_editor",
        "ICC profile anomaly + editor software",
        "Classic Photoshop/Adobe re-export pattern",
        requires=("icc_profile", "editor_software"),
    ),
    BonusSpec(
        "temporal_technical",
        "Temporal inconsistency + technical editing",
        "Date tampering combined with technical editing traces",
        requires=("temporal_inconsistency",),
        requires_any=TECHNICAL_RULES,
    ),
    BonusSpec(
        "date_present_ai",
        "Date preserved + AI/provenance marker",
        "Camera dates kept while an explicit AI/C2PA marker was inserted",
        requires=("ai_provenance",),
        requires_absent=("date_absent",),
    ),
    BonusSpec(
        "ai_technical",
        "AI/provenance marker + technical editing",
        "Explicit AI evidence corroborated by technical editing traces",
        requires=("ai_provenance",),
        requires_any=TECHNICAL_RULES + ("dimension_mismatch",),
    ),
)


def evaluate_bonuses(rules: Iterable[RuleResult], config: ValidationConfig) -> list[CoOccurrenceBonus]:
    fired = {r.key for r in rules if r.detected}
    out: list[CoOccurrenceBonus] = []
    for spec in BONUSES:
        holds = spec.holds(fired)
        points = getattr(config.bonuses, spec.key) if holds else 0
        if holds:
            logger.debug("Bonus %s applied (+%d)", spec.key, points)
        out.append(
            CoOccurrenceBonus(
                key=spec.key,
                combination=spec.combination,
                detected=holds,
                points=points,
                description=spec.description,
                constituents=spec.constituents(fired) if holds else (),
            )
        )
    return out
