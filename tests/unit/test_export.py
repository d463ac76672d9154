"""Tests for report export."""

import io
from datetime import datetime, timezone

import pytest

from metascan.core.engine import score_metadata
from metascan.reporting.export import (
    CSV_HEADERS,
    FileRecord,
    build_csv_row,
    build_json_report,
    parse_file_size,
    write_csv,
)

CAMERA = {
    "SourceFile": "IMG_0001.jpg",
    "File:FileSize": 2048,
    "File:MIMEType": "image/jpeg",
    "EXIF:Make": "Canon",
    "EXIF:Model": "EOS 5D",
    "EXIF:DateTimeOriginal": "2024:01:01 10:00:00",
}

WHEN = datetime(2024, 2, 1, 12, 30, 0, tzinfo=timezone.utc)


class TestFileRecord:
    def test_from_exiftool(self):
        record = FileRecord.from_exiftool(CAMERA)
        assert record.filename == "IMG_0001.jpg"
        assert record.size_bytes == 2048
        assert record.mime_type == "image/jpeg"

    def test_from_exiftool_human_readable_size(self):
        record = FileRecord.from_exiftool({"SourceFile": "a.jpg", "File:FileSize": "2.3 MB"})
        assert record.size_bytes == 2411725
        row = build_csv_row(record, score_metadata(record.metadata))
        assert row[2] == "2355.20"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (2048, 2048),
            ("512 bytes", 512),
            ("15 kB", 15360),
            ("1.5 GB", 1610612736),
            ("4 MiB", 4194304),
            ("2.3MB", 2411725),
            ("unknown", None),
            ("", None),
            (float("nan"), None),
            (0, None),
            (True, None),
        ],
    )
    def test_parse_file_size(self, value, expected):
        assert parse_file_size(value) == expected

    def test_from_exiftool_defaults(self):
        record = FileRecord.from_exiftool({})
        assert record.filename == "unknown"
        assert record.size_bytes is None
        assert record.mime_type is None


class TestReports:
    def test_json_report_sections(self):
        record = FileRecord("a.jpg", CAMERA, 2048, "image/jpeg", analyzed_at=WHEN)
        report = build_json_report(record, score_metadata(CAMERA))
        assert set(report) == {"fileInfo", "metadata", "analysis"}
        assert report["fileInfo"]["analyzed_at"] == "2024-02-01T12:30:00+00:00"
        assert report["analysis"]["total_score"] == 0

    def test_csv_row(self):
        record = FileRecord("a.jpg", CAMERA, 2048, "image/jpeg", analyzed_at=WHEN)
        row = build_csv_row(record, score_metadata(CAMERA))
        assert len(row) == len(CSV_HEADERS)
        assert row[0] == "a.jpg"
        assert row[1] == "2024-02-01 12:30:00"
        assert row[2] == "2.00"
        assert row[5] == "Low risk"
        assert row[7] == "Canon EOS 5D"
        assert row[8] == "2024:01:01 10:00:00"
        assert row[10] == "None"

    def test_csv_row_missing_fields(self):
        record = FileRecord("blank.png", {}, analyzed_at=WHEN)
        row = build_csv_row(record, score_metadata({}))
        assert row[2] == "N/A"
        assert row[3] == "N/A"
        assert row[7] == "N/A"
        assert " | " in row[10]

    def test_write_csv(self):
        record = FileRecord("a.jpg", CAMERA, analyzed_at=WHEN)
        buf = io.StringIO()
        count = write_csv([build_csv_row(record, score_metadata(CAMERA))], buf)
        text = buf.getvalue()
        assert count == 1
        assert text.startswith("\ufeff")
        lines = text.lstrip("\ufeff").splitlines()
        assert lines[0].split(";")[0] == '"File name"'
        assert lines[1].startswith('"a.jpg";')

    def test_write_csv_without_bom(self):
        buf = io.StringIO()
        assert write_csv([], buf, bom=False) == 0
        assert buf.getvalue().startswith('"File name"')
