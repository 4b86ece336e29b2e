"""
Tests for the FastAPI layer, run against a temporary bookings CSV.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

import core.data
from api.main import app

from conftest import CSV_HEADER


@pytest.fixture
def client(scenario_csv, monkeypatch):
    monkeypatch.setattr(core.data, "DATA_DIR", scenario_csv.parent)
    return TestClient(app)


class TestOverviewEndpoint:
    def test_unfiltered(self, client):
        resp = client.post("/overview", json={})
        assert resp.status_code == 200
        body = resp.json()
        assert body["record_count"] == 3
        assert body["totals"] == {"adults": 6, "children": 1, "total_visitors": 8}
        assert body["countries"] == [{"country": "USA", "visitors": 7}, {"country": "France", "visitors": 1}]
        assert body["time_series"] == [
            {"date": "2023-07-01", "visitors": 4},
            {"date": "2023-07-02", "visitors": 4},
        ]
        assert set(body["charts"]) == {"visitors_over_time", "top_countries"}

    def test_filtered(self, client):
        resp = client.post("/overview", json={"start_date": "2023-07-02", "end_date": "2023-07-02"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["filters"] == {"start_date": "2023-07-02", "end_date": "2023-07-02"}
        assert body["totals"] == {"adults": 3, "children": 0, "total_visitors": 4}
        assert body["countries"] == [{"country": "USA", "visitors": 4}]

    def test_partial_range_ignored(self, client):
        resp = client.post("/overview", json={"start_date": "2023-07-02"})
        assert resp.json()["record_count"] == 3

    def test_invalid_date(self, client):
        resp = client.post("/overview", json={"start_date": "2023-13-01", "end_date": "2023-07-02"})
        assert resp.status_code == 422

    def test_quick_range(self, client):
        resp = client.post("/overview/quick/7")
        assert resp.status_code == 200
        body = resp.json()
        assert body["filters"]["end_date"] == date.today().isoformat()
        assert body["record_count"] == 0
        assert body["countries"] == []

    def test_quick_range_negative(self, client):
        assert client.post("/overview/quick/-1").status_code == 422

    def test_malformed_data_file(self, tmp_path, monkeypatch):
        (tmp_path / "hotel_bookings_1000.csv").write_text(CSV_HEADER + "2023,July,1,two,0,0,PRT,City Hotel\n")
        monkeypatch.setattr(core.data, "DATA_DIR", tmp_path)
        resp = TestClient(app).post("/overview", json={})
        assert resp.status_code == 500
        assert resp.json()["type"] == "MalformedRecord"


class TestMetaAndDebug:
    def test_meta_range(self, client):
        body = client.get("/meta/range").json()
        assert body == {"min_date": "2023-07-01", "max_date": "2023-07-02", "quick_ranges": [7, 30]}

    def test_meta_range_without_data(self, tmp_path, monkeypatch):
        monkeypatch.setattr(core.data, "DATA_DIR", tmp_path / "empty")
        body = TestClient(app).get("/meta/range").json()
        assert body["min_date"] is None

    def test_debug(self, client):
        body = client.get("/debug").json()
        assert body["row_counts"]["booking_rows"] == 3
        assert body["distinct_countries"] == 2


class TestExport:
    def test_export_filtered(self, client):
        resp = client.post("/export/bookings", json={"start_date": "2023-07-01", "end_date": "2023-07-01"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        lines = resp.text.strip().splitlines()
        assert lines[0].startswith("arrival_date_year,arrival_date_month")
        assert len(lines) == 3

    def test_malformed_data_file(self, tmp_path, monkeypatch):
        (tmp_path / "hotel_bookings_1000.csv").write_text(CSV_HEADER + "2023,July,1,x,0,0,PRT,City Hotel\n")
        monkeypatch.setattr(core.data, "DATA_DIR", tmp_path)
        resp = TestClient(app).post("/export/bookings", json={})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Row 1: column 'adults' value 'x' is not a non-negative integer", "type": "MalformedRecord"}
