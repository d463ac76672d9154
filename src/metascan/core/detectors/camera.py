"""metascan — Camera EXIF presence detectors (make, model, capture date)."""

from __future__ import annotations

from metascan.core.accessor import MetadataAccessor
from metascan.core.detectors.base import Detection, not_detected
from metascan.scoring_config import ValidationConfig


def detect_make_absent(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    make = meta.make()
    if make:
        return not_detected(f"Camera make: {make}", positive=f"Camera make present: {make}")
    return Detection(detected=True, evidence="No camera make in EXIF or IFD0")


def detect_model_absent(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    model = meta.model()
    if model:
        return not_detected(f"Camera model: {model}", positive=f"Camera model present: {model}")
    return Detection(detected=True, evidence="No camera model in EXIF or IFD0")


def detect_date_absent(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    if meta.has_any_date():
        date = meta.capture_date() or "present"
        return not_detected(f"Capture date: {date}", positive=f"Creation date present: {date}")
    return Detection(detected=True, evidence="No date field in any EXIF/XMP namespace")
