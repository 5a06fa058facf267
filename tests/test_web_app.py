#!/usr/bin/env python3
"""Tests for the Flask JSON API."""

from datetime import datetime, timezone

import pytest

from web.app import app

VEHICLE_YAML = """
vin: JF1ZNAA12G8700001
repairOrders:
  - id: 1
    retailDate: '2023-03-15'
    openDate: '2023-09-04'
    closeDate: '2023-09-06'
  - id: 2
    retailDate: '2023-03-15'
    openDate: '2024-01-10'
    closeDate: '2024-01-20'
  - id: 3
    retailDate: '2023-03-15'
    openDate: '2024-03-10'
    closeDate: '2024-03-20'
  - id: 4
    retailDate: '2023-03-15'
    openDate: '2024-02-10'
    closeDate: '2024-02-01'
"""


@pytest.fixture
def client(tmp_path):
    (tmp_path / "jf1zn.yaml").write_text(VEHICLE_YAML)
    (tmp_path / "empty.yaml").write_text("vin: EMPTY\nrepairOrders: []\n")
    app.config["TESTING"] = True
    app.config["VEHICLES_DIR"] = tmp_path
    app.config["CLOCK"] = lambda: datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)
    with app.test_client() as client:
        yield client


class TestHealth:
    """Tests for /health."""

    def test_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_data(as_text=True) == "ok"


class TestClaimsByVin:
    """Tests for /claims."""

    def test_lists_orders_highest_id_first(self, client):
        response = client.get("/claims?vin=jf1znaa12g8700001")
        assert response.status_code == 200
        claims = response.get_json()
        assert [c["id"] for c in claims] == [4, 3, 2, 1]
        assert claims[3]["ro_open_date"] == "2023-09-04"
        assert claims[3]["retail_date"] == "2023-03-15"

    def test_missing_vin(self, client):
        response = client.get("/claims")
        assert response.status_code == 400
        assert "vin query param is required" in response.get_data(as_text=True)

    def test_blank_vin(self, client):
        assert client.get("/claims?vin=%20%20").status_code == 400

    def test_unknown_vin(self, client):
        assert client.get("/claims?vin=NOPE").status_code == 404

    def test_method_not_allowed(self, client):
        assert client.post("/claims?vin=JF1ZNAA12G8700001").status_code == 405


class TestWarrantyYearClaims:
    """Tests for /claims/warranty-year."""

    def test_periods_from_injected_clock(self, client):
        response = client.get("/claims/warranty-year?vin=JF1ZNAA12G8700001")
        assert response.status_code == 200
        body = response.get_json()

        assert body["vin"] == "JF1ZNAA12G8700001"
        assert body["retail_date"] == "2023-03-15"
        assert [p["warranty_period"] for p in body["periods"]] == [
            {"start": "2024-03-15", "end": "2025-03-14"},
            {"start": "2023-03-15", "end": "2024-03-14"},
        ]
        assert [p["total_days"] for p in body["periods"]] == [6, 19]

    def test_items_carry_clipped_days(self, client):
        body = client.get("/claims/warranty-year?vin=JF1ZNAA12G8700001").get_json()
        oldest = body["periods"][1]
        assert oldest["items"] == [
            {"claim": {"id": 1, "ro_open_date": "2023-09-04", "ro_close_date": "2023-09-06"},
             "repair_days": 3},
            {"claim": {"id": 2, "ro_open_date": "2024-01-10", "ro_close_date": "2024-01-20"},
             "repair_days": 11},
            {"claim": {"id": 3, "ro_open_date": "2024-03-10", "ro_close_date": "2024-03-20"},
             "repair_days": 5},
        ]

    def test_malformed_claims_reported(self, client):
        body = client.get("/claims/warranty-year?vin=JF1ZNAA12G8700001").get_json()
        assert body["skipped_claim_ids"] == [4]

    def test_explicit_now(self, client):
        body = client.get(
            "/claims/warranty-year?vin=JF1ZNAA12G8700001&now=2024-03-14"
        ).get_json()
        assert len(body["periods"]) == 1
        assert body["periods"][0]["total_days"] == 19

    def test_now_before_retail_date_is_empty(self, client):
        response = client.get("/claims/warranty-year?vin=JF1ZNAA12G8700001&now=2020-01-01")
        assert response.status_code == 200
        assert response.get_json()["periods"] == []

    def test_invalid_now(self, client):
        response = client.get("/claims/warranty-year?vin=JF1ZNAA12G8700001&now=soon")
        assert response.status_code == 400

    def test_missing_vin(self, client):
        assert client.get("/claims/warranty-year").status_code == 400

    def test_unknown_vin(self, client):
        assert client.get("/claims/warranty-year?vin=NOPE").status_code == 404

    def test_vehicle_without_orders(self, client):
        """No retail date on file maps to not found."""
        assert client.get("/claims/warranty-year?vin=empty").status_code == 404

    def test_invalid_retail_date_in_file(self, client, tmp_path):
        (tmp_path / "bad.yaml").write_text("""
vin: BAD
repairOrders:
  - id: 1
    retailDate: 'someday'
    openDate: '2024-01-10'
    closeDate: '2024-01-20'
""")
        assert client.get("/claims/warranty-year?vin=BAD").status_code == 400

    def test_missing_retail_date_in_file(self, client, tmp_path):
        (tmp_path / "noretail.yaml").write_text("""
vin: NORETAIL
repairOrders:
  - id: 1
    openDate: '2024-01-10'
    closeDate: '2024-01-20'
""")
        response = client.get("/claims/warranty-year?vin=NORETAIL")
        assert response.status_code == 400
        assert "retailDate" in response.get_data(as_text=True)
        assert client.get("/claims?vin=NORETAIL").status_code == 400

    def test_unparseable_file_for_other_vehicle(self, client, tmp_path):
        """A broken vehicle file does not take down lookups for other VINs."""
        (tmp_path / "0broken.yaml").write_text("vin: [unclosed\n")
        response = client.get("/claims/warranty-year?vin=JF1ZNAA12G8700001")
        assert response.status_code == 200
        assert response.get_json()["vin"] == "JF1ZNAA12G8700001"
        assert client.get("/claims?vin=JF1ZNAA12G8700001").status_code == 200
