"""metascan — Digital-transport heuristic.

Messaging apps strip camera EXIF, re-encode to baseline 4:2:0 JPEG and resize to a
handful of edge lengths. That fingerprint must not be mistaken for manipulation, so
when enough independent signals agree the usable score is capped.

Votes (conservative: needs >= 3 of 4):
  1. JPEG with no make, model or date at all
  2. JPEG + JFIF marker + 4:2:0 subsampling
  3. Long edge at a known messenger resize target
  4. Generic sRGB ICC profile with a Google copyright
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from metascan.core.accessor import FILE_HEIGHT_KEYS, FILE_WIDTH_KEYS, JFIF_KEYS, MetadataAccessor, SUBSAMPLING_KEYS
from metascan.core.detectors import patterns
from metascan.core.detectors.encoding import subsampling_ratio
from metascan.scoring_config import ValidationConfig

logger = logging.getLogger(__name__)

MIN_VOTES = 3


@dataclass
class TransportVerdict:
    is_digital_transport: bool = False
    votes: int = 0
    reasons: list[str] = field(default_factory=list)

    def apply_cap(self, total_score: int, cap: int) -> int:
        """Cap the score when transport fired; never raises it."""
        if not self.is_digital_transport:
            return total_score
        return min(total_score, cap)


def detect_digital_transport(meta: MetadataAccessor, config: ValidationConfig) -> TransportVerdict:
    if not config.digital_transport_enabled:
        return TransportVerdict()

    reasons: list[str] = []
    is_jpeg = meta.is_jpeg()

    if is_jpeg and not meta.make() and not meta.model() and not meta.has_any_date():
        reasons.append("No camera EXIF (make/model/date)")

    ratio = subsampling_ratio(meta.first(SUBSAMPLING_KEYS))
    if is_jpeg and meta.has_any(JFIF_KEYS) and ratio == "4:2:0":
        reasons.append("JPEG + JFIF + 4:2:0")

    long_edge = max(meta.as_int(FILE_WIDTH_KEYS), meta.as_int(FILE_HEIGHT_KEYS))
    lo, hi = patterns.MESSENGER_EDGE_BAND
    if lo <= long_edge <= hi or long_edge in patterns.MESSENGER_EDGE_EXACT:
        reasons.append(f"Long edge {long_edge}px matches a messenger resize target")

    description = meta.icc_description()
    if "srgb" in description.lower() and patterns.TRANSPORT_ICC_VENDOR_RE.search(meta.icc_copyright()):
        reasons.append(f"Generic sRGB ICC profile ({description}) with Google copyright")

    votes = len(reasons)
    required = max(MIN_VOTES, config.transport_min_votes)
    fired = votes >= required
    if fired:
        logger.info("Digital transport detected (%d/4 votes): %s", votes, "; ".join(reasons))
    return TransportVerdict(is_digital_transport=fired, votes=votes, reasons=reasons if fired else [])
