"""metascan — Pattern tables consumed by the rule detectors.

Kept as data so the lists can be tuned without touching detector logic.
All regexes are matched against the raw field value unless noted.
"""

from __future__ import annotations

import re

# --- Editor software ---

KNOWN_EDITORS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"photoshop",
        r"lightroom",
        r"\bcanva\b",
        r"\bgimp\b",
        r"paint\.net",
        r"photodirector",
        r"luminar",
        r"capture one",
        r"affinity photo",
        r"pixelmator",
        r"snapseed",
        r"\bvsco\b",
        r"instagram",
        r"facetune",
        r"befunky",
        r"photopea",
        r"pixlr",
        r"\bfotor\b",
        r"picsart",
        r"photoroom",
        r"remove\.bg",
        r"iloveimg",
        r"photoscissors",
        r"inpaint",
        r"cleanup\.pictures",
        r"photolemur",
        r"\btopaz\b",
    )
)

# Generic editing verbs in a Software field: weaker evidence than a named editor.
GENERIC_EDIT_RE = re.compile(r"\b(edit(ed|or)?|process(ed|ing)?|enhance[dr]?|filter(ed)?|adjust(ed|ment)?)\b", re.IGNORECASE)

# Firmware/build identifiers that must never count as editors, even on a substring
# collision. The first pattern is case-sensitive: "S916BXXS8DYG6" matches, "Lightroom" does not.
FIRMWARE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(?=.*\d)[A-Z0-9._-]{6,}$"),
    re.compile(r"^build\s", re.IGNORECASE),
    re.compile(r"^v?\d+(\.\d+)+[a-z]?$", re.IGNORECASE),
)

# Photoshop IRB (APP13) group tags written only by Photoshop save/export.
PHOTOSHOP_IRB_KEYS = ("Photoshop:PhotoshopQuality", "Photoshop:PhotoshopFormat", "Photoshop:ProgressiveScans")

# Descriptive fields searched for editor names as a last resort.
EXTENDED_EDITOR_FIELDS = (
    "XMP:Creator",
    "XMP:Rights",
    "XMP:Description",
    "IPTC:ObjectName",
    "IPTC:Caption-Abstract",
    "EXIF:ImageDescription",
    "EXIF:UserComment",
    "XMP:HistorySoftwareAgent",
    "XMP-xmpMM:HistorySoftwareAgent",
    "xmpMM:History",
    "xmpMM:DerivedFrom",
    "XMP-photoshop:History",
)
URL_OR_PATH_RE = re.compile(r"https?:|://|\\")

# --- AI / provenance ---

AI_SOFTWARE_RE = re.compile(
    r"\b(midjourney|dall[\s·-]?e|stable\s+diffusion|leonardo\.ai|firefly|imagen|google ai|comfyui|automatic1111|novelai)\b",
    re.IGNORECASE,
)
AI_SOURCE_TYPE_RE = re.compile(
    r"(compositewithtrainedalgorithmicmedia|trainedalgorithmicmedia|algorithmicmedia|artificiallygenerated|compositesynthetic)",
    re.IGNORECASE,
)
DIGITAL_SOURCE_TYPE_KEYS = (
    "XMP-iptcExt:DigitalSourceType",
    "XMP-iptcExt:DigitalSourceFileType",
    "XMP:DigitalSourceType",
    "CBOR:ActionsDigitalSourceType",
    "DigitalSourceType",
)
GEN_AI_FLAG_KEYS = ("JSON:GenAIType", "GenAIType")
C2PA_ACTION_KEYS = ("CBOR:ActionsAction", "ActionsAction")
C2PA_AGENT_KEYS = ("CBOR:ActionsSoftwareAgent", "ActionsSoftwareAgent")

# Provenance containers: matched against lower-cased keys only.
PROVENANCE_KEY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"c2pa"),
    re.compile(r"jumbf"),
    re.compile(r"(^|:)jumd"),
    re.compile(r"manifest"),
)
JUMBF_LABEL_KEYS = ("JUMBF:JUMDType", "JUMBF:JUMDLabel")

# --- Encoding ---

PROGRESSIVE_RE = re.compile(r"progressive", re.IGNORECASE)
PROGRESSIVE_QUALIFIER_RE = re.compile(r"\b(dct|huffman)\b", re.IGNORECASE)

# --- ICC ---

# Camera/device defaults that are never anomalous (compared lower-cased, trimmed).
ICC_CAMERA_DEFAULTS = frozenset({"srgb", "adobe rgb", "adobe rgb (1998)", "prophoto rgb"})
ICC_DEVICE_VENDOR_RE = re.compile(r"\b(apple|google|samsung|display p3)\b", re.IGNORECASE)
ICC_EDITOR_VENDOR_RE = re.compile(r"(hewlett[\s-]?packard|\bhp\b|adobe|iec\s?61966-2[.-]1)", re.IGNORECASE)
ICC_EDITOR_VENDOR_CODES = frozenset({"hp", "adbe", "hewlett-packard"})

# --- Silent edits ---

MAKERNOTE_BRANDS = ("canon", "nikon", "sony", "fujifilm", "panasonic", "olympus")
COMPONENTS_ANOMALY_RE = re.compile(r"err\s*\(63\)|undef", re.IGNORECASE)

# --- Digital transport ---

MESSENGER_EDGE_BAND = (1580, 1620)
MESSENGER_EDGE_EXACT = frozenset({2048, 1280, 960})
TRANSPORT_ICC_VENDOR_RE = re.compile(r"google", re.IGNORECASE)


def looks_like_firmware(value: str) -> bool:
    text = value.strip()
    return any(p.search(text) for p in FIRMWARE_PATTERNS)


def match_editor(value: str) -> str | None:
    """Return the editor pattern text matched by ``value``, if any."""
    for pattern in KNOWN_EDITORS:
        if pattern.search(value):
            return pattern.pattern
    return None
