"""metascan — JPEG encoding and colour-profile detectors."""

from __future__ import annotations

import re

from metascan.core.accessor import (
    ENCODING_KEYS,
    ICC_GROUP_PREFIXES,
    MetadataAccessor,
    SUBSAMPLING_KEYS,
)
from metascan.core.detectors import patterns
from metascan.core.detectors.base import Detection, not_detected
from metascan.scoring_config import ValidationConfig

_RATIO_RE = re.compile(r"4\s*[:\s]\s*([0-4])\s*[:\s]\s*([0-4])")
_FACTOR_RE = re.compile(r"^\(?\s*([124])\s*[\s,]\s*([124])\s*\)?$")
_FACTOR_TO_RATIO = {("1", "1"): "4:4:4", ("2", "1"): "4:2:2", ("2", "2"): "4:2:0", ("1", "2"): "4:4:0"}


def subsampling_ratio(value: object) -> str | None:
    """Normalize the many textual forms of YCbCr subsampling to ``"4:x:y"``."""
    if value is None:
        return None
    text = str(value).strip().lower().replace("ycbcr", "")
    match = _RATIO_RE.search(text)
    if match:
        return f"4:{match.group(1)}:{match.group(2)}"
    match = _FACTOR_RE.match(text)
    if match:
        return _FACTOR_TO_RATIO.get((match.group(1), match.group(2)))
    return None


def detect_progressive_encoding(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    key, value = meta.first_with_key(ENCODING_KEYS)
    text = "" if value is None else str(value)
    # "progressive" alone is not enough: require a DCT/Huffman qualifier.
    if patterns.PROGRESSIVE_RE.search(text) and patterns.PROGRESSIVE_QUALIFIER_RE.search(text):
        return Detection(detected=True, evidence=f"{key}: {text}")
    return not_detected("Baseline DCT (camera default)" if text else "Encoding process not reported")


def detect_chroma_subsampling(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    key, value = meta.first_with_key(SUBSAMPLING_KEYS)
    ratio = subsampling_ratio(value)
    if ratio == "4:4:4":
        return Detection(detected=True, evidence=f"{key}: {value}")
    if ratio:
        return not_detected(f"YCbCr {ratio}")
    return not_detected("Subsampling not reported")


# --- ICC profile ---

ICC_VENDOR = "icc_profile"
ICC_NONSTANDARD = "icc_profile_nonstandard"
ICC_ABSENT = "icc_profile_absent"


def assess_icc(meta: MetadataAccessor) -> tuple[str | None, str]:
    """Return ``(weight_key, evidence)``; weight_key is None when the profile is unremarkable."""
    description = meta.icc_description()
    copyright_ = meta.icc_copyright()
    vendor_fields = meta.icc_vendor_fields()
    vendor_hit = next(
        (
            v
            for v in vendor_fields
            if v.strip().lower() in patterns.ICC_EDITOR_VENDOR_CODES or patterns.ICC_EDITOR_VENDOR_RE.search(v)
        ),
        None,
    )

    if description:
        if description.lower() in patterns.ICC_CAMERA_DEFAULTS:
            return None, f"Camera-default ICC profile: {description}"
        if patterns.ICC_DEVICE_VENDOR_RE.search(f"{description} {copyright_}"):
            return None, f"Device vendor ICC profile: {description}"
        if patterns.ICC_EDITOR_VENDOR_RE.search(description):
            return ICC_VENDOR, f"HP/Adobe ICC profile: {description}"
        if vendor_hit:
            return ICC_VENDOR, f"ICC profile {description} created by {vendor_hit}"
        return ICC_NONSTANDARD, f"Non-standard ICC profile: {description}"

    icc_keys = meta.keys_in_group(*ICC_GROUP_PREFIXES)
    if vendor_hit:
        return ICC_VENDOR, f"ICC profile created by {vendor_hit}"
    if icc_keys or any(k in meta.raw for k in ("ICC_Profile", "ICCProfile")):
        return ICC_ABSENT, "ICC profile block present without a description"
    return None, "No ICC profile"


def icc_is_generic(meta: MetadataAccessor) -> bool:
    """Generic sRGB or anomalous profile, as left behind by online editors."""
    description = meta.icc_description().lower()
    if "srgb" in description and not patterns.ICC_DEVICE_VENDOR_RE.search(f"{description} {meta.icc_copyright()}"):
        return True
    return assess_icc(meta)[0] is not None


def detect_icc_profile(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    weight_key, evidence = assess_icc(meta)
    if weight_key is None:
        return not_detected(evidence)
    return Detection(detected=True, evidence=evidence, weight_key=weight_key)
