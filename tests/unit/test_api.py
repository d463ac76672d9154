"""Tests for the HTTP API."""

import json

import pytest
from fastapi.testclient import TestClient

CAMERA = {
    "EXIF:Make": "Canon",
    "EXIF:Model": "EOS 5D",
    "EXIF:DateTimeOriginal": "2024:01:01 10:00:00",
}


@pytest.fixture
def client():
    from metascan.api.app import create_app

    return TestClient(create_app())


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["env"] == "test"


class TestScore:
    def test_score_one(self, client):
        resp = client.post("/v1/score", json={"metadata": CAMERA})
        assert resp.status_code == 200
        body = resp.json()
        assert body["total_score"] == 0
        assert body["risk_level"] == "low"

    def test_request_overrides(self, client):
        resp = client.post("/v1/score", json={"metadata": {}, "config": {"weights": {"date_absent": 0}}})
        assert resp.json()["total_score"] == 2

    def test_invalid_override(self, client):
        resp = client.post("/v1/score", json={"metadata": {}, "config": {"weights": {"bogus": 1}}})
        assert resp.status_code == 400

    def test_invalid_body(self, client):
        resp = client.post("/v1/score", json={"metadata": "not a map"})
        assert resp.status_code == 422

    def test_effective_config(self, client):
        resp = client.get("/v1/score/config")
        assert resp.status_code == 200
        assert resp.json()["thresholds"] == {"low_max": 3, "moderate_max": 7, "high_max": 12}


class TestBatch:
    def test_batch(self, client):
        items = [{"filename": "a.jpg", "metadata": CAMERA}, {"filename": "b.jpg", "metadata": {}}]
        resp = client.post("/v1/score/batch", json={"items": items})
        assert resp.status_code == 200
        body = resp.json()
        assert [i["filename"] for i in body] == ["a.jpg", "b.jpg"]
        assert body[1]["result"]["total_score"] == 4

    def test_batch_limit(self, monkeypatch):
        monkeypatch.setenv("METASCAN_MAX_BATCH_SIZE", "1")
        from metascan.api.app import create_app

        client = TestClient(create_app())
        items = [{"filename": "a.jpg", "metadata": {}}, {"filename": "b.jpg", "metadata": {}}]
        resp = client.post("/v1/score/batch", json={"items": items})
        assert resp.status_code == 413

    def test_csv_report(self, client):
        items = [{"filename": "a.jpg", "metadata": CAMERA, "size_bytes": 1024, "mime_type": "image/jpeg"}]
        resp = client.post("/v1/score/report.csv", json={"items": items})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.content.startswith(b"\xef\xbb\xbf")
        assert '"a.jpg";' in resp.text


class TestOverrideFile:
    def test_override_file_read_once(self, tmp_path, monkeypatch):
        path = tmp_path / "weights.json"
        path.write_text(json.dumps({"transport_cap": 5}), encoding="utf-8")
        monkeypatch.setenv("METASCAN_SCORING_CONFIG_PATH", str(path))
        from metascan.api.app import create_app

        client = TestClient(create_app())
        assert client.get("/v1/score/config").json()["transport_cap"] == 5

        path.write_text(json.dumps({"transport_cap": 6}), encoding="utf-8")
        assert client.get("/v1/score/config").json()["transport_cap"] == 5
        assert client.post("/v1/score", json={"metadata": {}}).status_code == 200

    def test_unreadable_override_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("METASCAN_SCORING_CONFIG_PATH", str(tmp_path / "absent.json"))
        from metascan.api.app import create_app

        client = TestClient(create_app())
        assert client.get("/v1/score/config").status_code == 500
        assert client.post("/v1/score", json={"metadata": {}}).status_code == 400
