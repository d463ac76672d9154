"""metascan — AI generation and content-provenance detector.

Two independent sources of evidence:
  - Provenance containers (C2PA / JUMBF / manifest keys): their presence alone is
    treated as unambiguous processing history.
  - Explicit AI markers: IPTC DigitalSourceType, C2PA action metadata, GenAI flags
    and AI generator names in creator-tool fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from metascan.core.accessor import CREATOR_TOOL_KEYS, MetadataAccessor, SOFTWARE_KEYS
from metascan.core.detectors import patterns
from metascan.core.detectors.base import Detection, not_detected
from metascan.scoring_config import ValidationConfig

STRONG_C2PA = "strong_c2pa"


@dataclass
class ProvenanceFindings:
    indicators: list[str] = field(default_factory=list)
    has_container: bool = False
    has_strong_c2pa: bool = False  # c2pa.edited action AND an AI DigitalSourceType

    @property
    def has_ai(self) -> bool:
        return bool(self.indicators)


def provenance_keys(meta: MetadataAccessor) -> list[str]:
    """Keys whose lower-cased name matches a provenance container pattern."""
    raw_keys = list(meta.raw.keys())
    hits = []
    for raw_key, lowered in zip(raw_keys, meta.lowered_keys()):
        if any(p.search(lowered) for p in patterns.PROVENANCE_KEY_PATTERNS):
            hits.append(str(raw_key))
    return hits


def collect_provenance(meta: MetadataAccessor) -> ProvenanceFindings:
    findings = ProvenanceFindings()

    container_keys = provenance_keys(meta)
    if container_keys:
        findings.has_container = True
        label = " ".join(meta.first_str((k,)) for k in patterns.JUMBF_LABEL_KEYS).strip()
        suffix = f" ({label})" if label else ""
        findings.indicators.append(f"C2PA/JUMBF manifest present in {container_keys[0]}{suffix}")

    action = meta.first_str(patterns.C2PA_ACTION_KEYS).lower()
    if "c2pa" in action:
        findings.indicators.append(f"C2PA action: {action}")

    agent = meta.first_str(patterns.C2PA_AGENT_KEYS)
    if agent:
        findings.indicators.append(f"C2PA software agent: {agent}")

    source_type_ai = False
    for key in patterns.DIGITAL_SOURCE_TYPE_KEYS:
        value = meta.get(key)
        if value is not None and patterns.AI_SOURCE_TYPE_RE.search(str(value)):
            source_type_ai = True
            findings.indicators.append(f"DigitalSourceType in {key}: {value}")

    findings.has_strong_c2pa = "c2pa.edited" in action and source_type_ai

    gen_ai = meta.first_str(patterns.GEN_AI_FLAG_KEYS).lower()
    if gen_ai in ("1", "true", "yes"):
        findings.indicators.append("GenAIType flag set")

    for key in CREATOR_TOOL_KEYS + SOFTWARE_KEYS:
        value = meta.get(key)
        if value is not None and patterns.AI_SOFTWARE_RE.search(str(value)):
            findings.indicators.append(f"AI generator named in {key}: {value}")
            break

    return findings


def detect_ai_provenance(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    findings = collect_provenance(meta)
    if not findings.has_ai:
        return not_detected("No AI or C2PA/JUMBF markers")
    facts = frozenset({STRONG_C2PA}) if findings.has_strong_c2pa else frozenset()
    return Detection(detected=True, evidence="; ".join(findings.indicators), facts=facts)
