"""metascan — Dimensional and temporal consistency detectors."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone

from metascan.core.accessor import (
    CREATE_DATE_KEYS,
    EXIF_HEIGHT_KEYS,
    EXIF_WIDTH_KEYS,
    FILE_HEIGHT_KEYS,
    FILE_WIDTH_KEYS,
    MODIFY_DATE_KEYS,
    ORIGINAL_DATE_KEYS,
    MetadataAccessor,
)
from metascan.core.detectors.base import Detection, not_detected
from metascan.scoring_config import ValidationConfig

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(
    r"^(\d{4})[:-](\d{2})[:-](\d{2})"
    r"(?:[ T](\d{2}):(\d{2})(?::(\d{2}))?(?:\.(\d+))?)?"
    r"\s*(Z|[+-]\d{2}:?\d{2})?$"
)


def parse_exif_datetime(value: object) -> datetime:
    """Parse EXIF (``2024:01:31 10:00:00+02:00``) or ISO-8601 date strings.

    Raises ValueError when the text is not a valid date (e.g. ``0000:00:00 00:00:00``).
    """
    text = str(value).strip()
    match = _DATE_RE.match(text)
    if not match:
        raise ValueError(f"unrecognised date format: {text!r}")
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    tz = None
    if offset:
        if offset == "Z":
            tz = timezone.utc
        else:
            sign = -1 if offset[0] == "-" else 1
            digits = offset[1:].replace(":", "")
            tz = timezone(sign * timedelta(hours=int(digits[:2]), minutes=int(digits[2:])))
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    return datetime(
        int(year), int(month), int(day), int(hour or 0), int(minute or 0), int(second or 0), micro, tzinfo=tz
    )


def _comparable(a: datetime, b: datetime) -> tuple[datetime, datetime]:
    if a.tzinfo is not None and b.tzinfo is not None:
        return a, b
    return a.replace(tzinfo=None), b.replace(tzinfo=None)


def detect_dimension_mismatch(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    exif_w, exif_h = meta.as_int(EXIF_WIDTH_KEYS), meta.as_int(EXIF_HEIGHT_KEYS)
    file_w, file_h = meta.as_int(FILE_WIDTH_KEYS), meta.as_int(FILE_HEIGHT_KEYS)
    if min(exif_w, exif_h, file_w, file_h) <= 0:
        return not_detected("No dimension data available")
    if (exif_w, exif_h) != (file_w, file_h):
        return Detection(
            detected=True,
            evidence=f"EXIF {exif_w}x{exif_h} vs file {file_w}x{file_h}",
        )
    return not_detected("Dimensions consistent", positive=f"Dimensions consistent ({file_w}x{file_h})")


def detect_temporal_inconsistency(meta: MetadataAccessor, config: ValidationConfig) -> Detection:
    """Modify-before-original, or modify long after create.

    A date that is present but cannot be parsed counts as inconsistent; an absent
    date only means there is nothing to compare.
    """
    original = meta.first(ORIGINAL_DATE_KEYS)
    create = meta.first(CREATE_DATE_KEYS)
    modify = meta.first(MODIFY_DATE_KEYS)

    if modify is None or (original is None and create is None):
        return not_detected("No temporal data available")

    try:
        modified_at = parse_exif_datetime(modify)
        original_at = parse_exif_datetime(original) if original is not None else None
        created_at = parse_exif_datetime(create) if create is not None else None
    except ValueError as exc:
        logger.debug("Date parse failure: %s", exc)
        return Detection(detected=True, evidence=f"Invalid date format detected ({exc})")

    if original_at is not None:
        m, o = _comparable(modified_at, original_at)
        if m < o:
            return Detection(
                detected=True,
                evidence=f"ModifyDate ({modify}) earlier than DateTimeOriginal ({original})",
            )

    if created_at is not None:
        m, c = _comparable(modified_at, created_at)
        gap_hours = (m - c).total_seconds() / 3600
        if gap_hours > config.temporal_max_gap_hours:
            return Detection(
                detected=True,
                evidence=f"ModifyDate {gap_hours:.0f}h after CreateDate ({create} -> {modify})",
            )

    return not_detected("Dates consistent", positive="Temporal consistency verified")
