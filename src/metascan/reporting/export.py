"""metascan — Report export (JSON per file, CSV per batch).

CSV layout (one row per file, ``;`` delimited, every cell quoted):
  filename, analysis timestamp, size (KB), type, risk level, classification, score,
  camera, capture date, positive signals, risk signals, recommendation
"""

from __future__ import annotations

import csv
import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import IO, Any, Iterable, Mapping

from metascan.core.accessor import MetadataAccessor
from metascan.models.schemas import ScoreResult

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "File name",
    "Analysis date/time",
    "Size (KB)",
    "Type",
    "Risk level",
    "Classification",
    "Score",
    "Camera",
    "Capture date",
    "Positive signals",
    "Risk signals",
    "Recommendation",
]

LEVEL_LABELS = {
    0: "Low risk",
    1: "Moderate risk",
    2: "High risk",
    3: "Very high risk",
}

NOT_AVAILABLE = "N/A"
SIGNAL_SEPARATOR = " | "

# ExifTool prints sizes with binary multiples unless run with -n ("2.3 MB", "512 bytes").
_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(bytes?|[kmgt]i?b)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {"k": 1024, "m": 1024**2, "g": 1024**3, "t": 1024**4}


def parse_file_size(value: Any) -> int | None:
    """Byte count from a numeric FileSize or ExifTool's human-readable form; None if unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) and value > 0 else None
    match = _SIZE_RE.match(str(value))
    if not match:
        return None
    number, unit = float(match.group(1)), (match.group(2) or "").lower()
    multiplier = 1 if not unit or unit.startswith("byte") else _SIZE_UNITS[unit[0]]
    size = int(round(number * multiplier))
    return size or None


@dataclass
class FileRecord:
    """One analysed file as handed over by the upload/extraction collaborators."""

    filename: str
    metadata: Mapping[str, Any]
    size_bytes: int | None = None
    mime_type: str | None = None
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_exiftool(cls, entry: Mapping[str, Any]) -> FileRecord:
        """Build a record from one object of ``exiftool -j -G`` output."""
        meta = MetadataAccessor(entry)
        filename = meta.first_str(("SourceFile", "File:FileName", "System:FileName", "FileName")) or "unknown"
        size = parse_file_size(meta.first(("File:FileSize", "System:FileSize", "FileSize")))
        mime = meta.first_str(("File:MIMEType", "MIMEType")) or None
        return cls(filename=filename, metadata=entry, size_bytes=size, mime_type=mime)


def _join_signals(signals: Iterable[str]) -> str:
    joined = SIGNAL_SEPARATOR.join(signals)
    return joined or "None"


def build_json_report(record: FileRecord, result: ScoreResult) -> dict[str, Any]:
    return {
        "fileInfo": {
            "file_name": record.filename,
            "size_bytes": record.size_bytes,
            "mime_type": record.mime_type,
            "analyzed_at": record.analyzed_at.isoformat(),
        },
        "metadata": {str(k): v for k, v in record.metadata.items()},
        "analysis": result.to_dict(),
    }


def build_csv_row(record: FileRecord, result: ScoreResult) -> list[str]:
    camera = " ".join(p for p in (result.make, result.model) if p) or NOT_AVAILABLE
    size_kb = f"{record.size_bytes / 1024:.2f}" if record.size_bytes else NOT_AVAILABLE
    return [
        record.filename,
        record.analyzed_at.strftime("%Y-%m-%d %H:%M:%S"),
        size_kb,
        record.mime_type or NOT_AVAILABLE,
        str(result.level),
        LEVEL_LABELS.get(result.level, "Unknown"),
        str(result.adjusted_score),
        camera,
        result.capture_date or NOT_AVAILABLE,
        _join_signals(result.positive_signals),
        _join_signals(result.risk_signals),
        result.recommendation,
    ]


def write_csv(rows: Iterable[list[str]], stream: IO[str], bom: bool = True) -> int:
    """Write header + rows to ``stream``; returns the number of data rows."""
    if bom:
        stream.write("\ufeff")
    writer = csv.writer(stream, delimiter=";", quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    count = 0
    for row in rows:
        writer.writerow(row)
        count += 1
    logger.debug("Wrote CSV report with %d row(s)", count)
    return count
