"""Tests for the command-line entry point."""

import json

import pytest

from metascan.cli import EXIT_BAD_INPUT, EXIT_OK, load_exiftool_json, main
from metascan.exceptions import MetascanError

ENTRIES = [
    {
        "SourceFile": "camera.jpg",
        "EXIF:Make": "Canon",
        "EXIF:Model": "EOS 5D",
        "EXIF:DateTimeOriginal": "2024:01:01 10:00:00",
    },
    {"SourceFile": "edited.jpg", "EXIF:Software": "Adobe Photoshop 25.0"},
]


@pytest.fixture
def exif_json(tmp_path):
    path = tmp_path / "meta.json"
    path.write_text(json.dumps(ENTRIES), encoding="utf-8")
    return path


class TestLoad:
    def test_single_object(self, tmp_path):
        path = tmp_path / "one.json"
        path.write_text(json.dumps(ENTRIES[0]), encoding="utf-8")
        assert load_exiftool_json(path) == [ENTRIES[0]]

    def test_rejects_scalars(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(MetascanError):
            load_exiftool_json(path)


class TestMain:
    def test_json_to_stdout(self, exif_json, capsys):
        assert main(["score", str(exif_json), "--log-level", "ERROR"]) == EXIT_OK
        reports = json.loads(capsys.readouterr().out)
        assert [r["fileInfo"]["file_name"] for r in reports] == ["camera.jpg", "edited.jpg"]
        assert reports[0]["analysis"]["level"] == 0
        assert reports[1]["analysis"]["rules"][3]["detected"] is True

    def test_csv_to_file(self, exif_json, tmp_path):
        out = tmp_path / "report.csv"
        assert main(["score", str(exif_json), "--format", "csv", "--output", str(out), "--no-bom"]) == EXIT_OK
        lines = out.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3
        assert lines[0].startswith('"File name"')

    def test_config_override(self, exif_json, tmp_path, capsys):
        cfg = tmp_path / "weights.json"
        cfg.write_text(json.dumps({"weights": {"editor_software": 10}}), encoding="utf-8")
        assert main(["score", str(exif_json), "--config", str(cfg), "--log-level", "ERROR"]) == EXIT_OK
        reports = json.loads(capsys.readouterr().out)
        assert reports[1]["analysis"]["total_score"] >= 10

    def test_missing_input(self, tmp_path):
        assert main(["score", str(tmp_path / "absent.json"), "--log-level", "ERROR"]) == EXIT_BAD_INPUT

    def test_bad_config(self, exif_json, tmp_path):
        cfg = tmp_path / "weights.json"
        cfg.write_text(json.dumps({"thresholds": {"low_max": 50}}), encoding="utf-8")
        assert main(["score", str(exif_json), "--config", str(cfg), "--log-level", "ERROR"]) == EXIT_BAD_INPUT
