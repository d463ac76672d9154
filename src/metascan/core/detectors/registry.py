"""metascan — Rule registry.

The ordered tuple below is both the evaluation order and the display order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from metascan.core.accessor import MetadataAccessor
from metascan.core.detectors.base import Detection, RuleSpec
from metascan.core.detectors.camera import detect_date_absent, detect_make_absent, detect_model_absent
from metascan.core.detectors.consistency import detect_dimension_mismatch, detect_temporal_inconsistency
from metascan.core.detectors.encoding import (
    detect_chroma_subsampling,
    detect_icc_profile,
    detect_progressive_encoding,
)
from metascan.core.detectors.provenance import detect_ai_provenance
from metascan.core.detectors.software import (
    detect_editor_software,
    detect_silent_edit,
    detect_software_pattern,
)
from metascan.models.enums import RuleWeight
from metascan.models.schemas import RuleResult
from metascan.scoring_config import ValidationConfig

logger = logging.getLogger(__name__)

RULES: tuple[RuleSpec, ...] = (
    RuleSpec(
        "make_absent", "Camera make", RuleWeight.WEAK,
        "Camera make missing from EXIF", detect_make_absent,
    ),
    RuleSpec(
        "model_absent", "Camera model", RuleWeight.WEAK,
        "Camera model missing from EXIF", detect_model_absent,
    ),
    RuleSpec(
        "date_absent", "Capture date", RuleWeight.MEDIUM,
        "No capture/creation date in any namespace", detect_date_absent,
    ),
    RuleSpec(
        "editor_software", "Editor software", RuleWeight.STRONG,
        "Editing software declared in Software/CreatorTool or Photoshop tags", detect_editor_software,
    ),
    RuleSpec(
        "silent_edit", "Silent edit signals", RuleWeight.WEAK,
        "Camera EXIF kept but structurally altered by an editor", detect_silent_edit,
    ),
    RuleSpec(
        "ai_provenance", "AI/provenance indicators", RuleWeight.VERY_STRONG,
        "Explicit AI generation markers or C2PA/JUMBF provenance manifest", detect_ai_provenance,
    ),
    RuleSpec(
        "progressive_encoding", "Progressive encoding", RuleWeight.MEDIUM,
        "Progressive DCT indicates re-encoding", detect_progressive_encoding,
    ),
    RuleSpec(
        "chroma_subsampling", "Chroma subsampling", RuleWeight.MEDIUM,
        "YCbCr 4:4:4 is unusual for camera output", detect_chroma_subsampling,
    ),
    RuleSpec(
        "icc_profile", "ICC profile", RuleWeight.MEDIUM,
        "HP/Adobe, non-standard or empty ICC profile indicates editing", detect_icc_profile,
    ),
    RuleSpec(
        "dimension_mismatch", "Dimensions", RuleWeight.MEDIUM,
        "EXIF dimensions differ from the image container", detect_dimension_mismatch,
    ),
    RuleSpec(
        "temporal_inconsistency", "Temporal consistency", RuleWeight.MEDIUM,
        "Modification date contradicts capture/creation date", detect_temporal_inconsistency,
    ),
    RuleSpec(
        "software_pattern", "Online editor pattern", RuleWeight.MEDIUM,
        "Empty Software + no dates + generic ICC left by online editors", detect_software_pattern,
    ),
)

RULES_BY_KEY: dict[str, RuleSpec] = {spec.key: spec for spec in RULES}


@dataclass
class RuleEvaluation:
    """All rule outcomes of one scoring call."""

    results: list[RuleResult] = field(default_factory=list)
    positives: list[str] = field(default_factory=list)
    facts: set[str] = field(default_factory=set)


def _run(spec: RuleSpec, meta: MetadataAccessor, config: ValidationConfig) -> tuple[RuleResult, Detection]:
    detection = spec.detector(meta, config)
    result = RuleResult(
        key=spec.key,
        category=spec.category,
        detected=detection.detected,
        points=spec.points_for(detection, config),
        weight=spec.tier,
        description=spec.description,
        evidence=detection.evidence,
    )
    return result, detection


def evaluate_rule(spec: RuleSpec, meta: MetadataAccessor, config: ValidationConfig) -> tuple[RuleResult, str | None]:
    """Run one detector; returns the RuleResult and its positive signal (if any)."""
    result, detection = _run(spec, meta, config)
    return result, None if detection.detected else detection.positive


def evaluate_rules(meta: MetadataAccessor, config: ValidationConfig) -> RuleEvaluation:
    evaluation = RuleEvaluation()
    for spec in RULES:
        result, detection = _run(spec, meta, config)
        evaluation.results.append(result)
        if detection.detected:
            logger.debug("Rule %s fired (+%d): %s", spec.key, result.points, result.evidence)
            evaluation.facts.update(detection.facts)
        elif detection.positive:
            evaluation.positives.append(detection.positive)
    return evaluation
