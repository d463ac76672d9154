"""metascan — Software-field detectors.

Editor detection walks a progressive fallback:
  1. Canonical fields (Software, CreatorTool): named editor → high, generic edit verb → medium
  2. Any XMP-photoshop namespace key (except DateCreated) → high
  3. Photoshop IRB group tags (quality/format/progressive scans) → high
  4. Editor names inside descriptive fields, skipping URLs and paths → medium

Firmware-looking values are skipped before any matching.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from metascan.core.accessor import CREATOR_TOOL_KEYS, MetadataAccessor, SOFTWARE_KEYS
from metascan.core.detectors import patterns
from metascan.core.detectors.base import Detection, not_detected
from metascan.core.detectors.encoding import icc_is_generic
from metascan.models.enums import EditorConfidence
from metascan.scoring_config import ValidationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorMatch:
    software: str
    confidence: EditorConfidence
    source: str


def find_editor(meta: MetadataAccessor) -> EditorMatch | None:
    """Locate editing-software evidence, or None."""
    for key in SOFTWARE_KEYS + CREATOR_TOOL_KEYS:
        value = meta.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if patterns.looks_like_firmware(text):
            logger.debug("Skipping firmware-like %s=%r", key, text)
            continue
        if patterns.match_editor(text):
            return EditorMatch(text, EditorConfidence.HIGH, f"canonical:{key}")
        if patterns.GENERIC_EDIT_RE.search(text):
            return EditorMatch(text, EditorConfidence.MEDIUM, f"canonical:{key}")

    xmp_photoshop = [k for k in meta.keys_in_group("XMP-photoshop:") if "DateCreated" not in k]
    if xmp_photoshop:
        return EditorMatch("Adobe Photoshop (XMP)", EditorConfidence.HIGH, "xmp-photoshop")

    irb = [(k.split(":", 1)[1], meta.get(k)) for k in patterns.PHOTOSHOP_IRB_KEYS if meta.get(k) is not None]
    if irb:
        parts = ", ".join(f"{name}={value}" for name, value in irb)
        return EditorMatch(f"Adobe Photoshop ({parts})", EditorConfidence.HIGH, "photoshop-group")

    for key in patterns.EXTENDED_EDITOR_FIELDS:
        value = meta.get(key)
        if not isinstance(value, str) or patterns.URL_OR_PATH_RE.search(value):
            continue
        if patterns.match_editor(value):
            return EditorMatch(value.strip(), EditorConfidence.MEDIUM, f"extended:{key}")

    return None


def detect_editor_software(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    match = find_editor(meta)
    if match is None:
        return not_detected("No editing software declared", positive="No editing software declared")
    return Detection(
        detected=True,
        evidence=f"{match.software} [{match.source}, {match.confidence.value} confidence]",
    )


def silent_edit_reasons(meta: MetadataAccessor) -> list[str]:
    """Weak signs of editors that preserve camera EXIF."""
    reasons: list[str] = []

    scene = meta.first_str(("ExifIFD:SceneType", "EXIF:SceneType", "SceneType"))
    if scene and "directly photographed" not in scene.lower():
        reasons.append(f'SceneType is not "Directly photographed" ({scene})')

    components = meta.first_str(
        ("ExifIFD:ComponentsConfiguration", "EXIF:ComponentsConfiguration", "ComponentsConfiguration")
    )
    if components and patterns.COMPONENTS_ANOMALY_RE.search(components):
        reasons.append(f"Anomalous ComponentsConfiguration ({components})")

    make, model = meta.make(), meta.model()
    if make and model:
        has_makernote = meta.has_any(("ExifIFD:MakerNote", "EXIF:MakerNote")) or bool(meta.keys_in_group("MakerNote"))
        if not has_makernote and any(brand in make.lower() for brand in patterns.MAKERNOTE_BRANDS):
            reasons.append(f"MakerNote missing despite Make/Model ({make})")
        if not meta.has_any(("IFD1:ImageWidth", "Thumbnail:ImageWidth", "IFD1:ThumbnailImage", "ThumbnailImage")):
            reasons.append("EXIF thumbnail (IFD1) missing")

    return reasons


def detect_silent_edit(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    if not config.silent_edit_enabled:
        return not_detected("Silent-edit signals disabled")
    if find_editor(meta) is not None:
        return not_detected("Editor already declared")
    reasons = silent_edit_reasons(meta)
    applied = reasons[: config.silent_edit_max]
    if not applied:
        return not_detected("No silent-edit signals")
    return Detection(detected=True, evidence="; ".join(applied), units=len(applied))


def detect_software_pattern(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    """Online-editor export: Software stripped, no dates, generic ICC left behind."""
    software_blank = not meta.software()
    date_absent = not meta.has_any_date()
    generic_icc = icc_is_generic(meta)
    if software_blank and date_absent and generic_icc:
        return Detection(detected=True, evidence="Software empty + no dates + generic ICC profile")
    return not_detected("Normal camera pattern")
