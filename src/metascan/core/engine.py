"""metascan — Alteration scoring engine.

Single entry point:
  score_metadata(metadata, config) → ScoreResult

Pipeline:
  1. Accessor        → normalized lookups over the metadata map
  2. Rules           → independent detectors, points from the weight table
  3. Bonuses         → co-occurrence combinations of detected rules
  4. Transport       → messenger re-encoding vote, caps the usable score
  5. Classification  → threshold lookup, confidence, explanation

Stateless and synchronous: no I/O, nothing kept between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from metascan.core.accessor import MetadataAccessor
from metascan.core.bonus import evaluate_bonuses
from metascan.core.classifier import classify, explain
from metascan.core.detectors.provenance import STRONG_C2PA
from metascan.core.detectors.registry import evaluate_rules
from metascan.core.transport import detect_digital_transport
from metascan.exceptions import MetadataMissingError
from metascan.models.schemas import CoOccurrenceBonus, RuleResult, ScoreResult
from metascan.scoring_config import DEFAULT_CONFIG, ValidationConfig

logger = logging.getLogger(__name__)


def _unique(items: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def _risk_signals(rules: list[RuleResult], bonuses: list[CoOccurrenceBonus], transport_reasons: list[str]) -> list[str]:
    signals = [f"{r.category}: {r.evidence} (+{r.points})" for r in rules if r.detected]
    signals.extend(f"Co-occurrence: {b.combination} (+{b.points})" for b in bonuses if b.detected)
    signals.extend(f"Digital transport: {reason}" for reason in transport_reasons)
    return signals


class AlterationScorer:
    """Score metadata maps against one fixed configuration."""

    def __init__(self, config: ValidationConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def score(self, metadata: Mapping[str, Any]) -> ScoreResult:
        return score_metadata(metadata, self.config)


def score_metadata(metadata: Mapping[str, Any] | None, config: ValidationConfig = DEFAULT_CONFIG) -> ScoreResult:
    """Compute the alteration verdict for one metadata map."""
    if metadata is None or not isinstance(metadata, Mapping):
        raise MetadataMissingError("A metadata mapping is required for scoring")

    meta = MetadataAccessor(metadata)

    evaluation = evaluate_rules(meta, config)
    rules = evaluation.results
    bonuses = evaluate_bonuses(rules, config)
    total = sum(r.points for r in rules) + sum(b.points for b in bonuses)

    transport = detect_digital_transport(meta, config)
    adjusted = transport.apply_cap(total, config.transport_cap)

    verdict = classify(adjusted, config.thresholds, transport.is_digital_transport)
    applied = [b for b in bonuses if b.detected]
    explanation = explain(adjusted, total, verdict.level, transport.is_digital_transport, len(applied))

    if verdict.level >= 3:
        logger.warning(
            "Alteration verdict=%s: total=%d adjusted=%d rules=%s",
            verdict.risk_level.value,
            total,
            adjusted,
            [r.key for r in rules if r.detected],
        )
    else:
        logger.debug("Alteration verdict=%s: total=%d adjusted=%d", verdict.risk_level.value, total, adjusted)

    return ScoreResult(
        total_score=total,
        adjusted_score=adjusted,
        display_score=min(adjusted, config.display_ceiling),
        level=verdict.level,
        risk_level=verdict.risk_level,
        classification=verdict.classification,
        confidence_level=verdict.confidence_level,
        recommendation=verdict.recommendation,
        is_digital_transport=transport.is_digital_transport,
        transport_reasons=tuple(transport.reasons),
        has_strong_c2pa=STRONG_C2PA in evaluation.facts,
        make=meta.make(),
        model=meta.model(),
        capture_date=meta.capture_date(),
        rules=tuple(rules),
        bonuses=tuple(bonuses),
        positive_signals=_unique(evaluation.positives),
        risk_signals=_unique(_risk_signals(rules, bonuses, transport.reasons)),
        explanation=explanation,
    )
