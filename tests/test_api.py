import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from derivrecon.unified_recon.api.app import app

SAMPLE_PAYLOAD = Path(__file__).parent.parent / "data" / "sample_payload.json"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def payload():
    return json.loads(SAMPLE_PAYLOAD.read_text())


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert set(response.json()["sources"]) == {"DTCC", "CLS", "OCC"}


def test_reconcile_all_match(client, payload):
    response = client.post("/reconcile", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["allMatch"] is True
    assert body["businessDate"] == "2024-03-15"
    assert [r["sourceSystem"] for r in body["results"]] == ["DTCC", "CLS", "OCC"]
    cls_row = body["results"][1]
    assert cls_row["totalAmount"] == "511.00"
    assert cls_row["status"] == "MATCH"


def test_mismatch_is_not_an_http_error(client, payload):
    payload["sanitizedTotals"][2]["totalAmount"] = "245.00"

    response = client.post("/reconcile", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["allMatch"] is False
    occ_row = body["results"][2]
    assert occ_row["status"] == "MISMATCH"
    assert occ_row["amountDelta"] == "5.00"


def test_unknown_source_reported(client, payload):
    payload["records"].append({"sourceSystem": "LCH", "recordId": "L1"})

    body = client.post("/reconcile", json=payload).json()

    assert body["unroutedCount"] == 1
    assert body["skippedRecords"][-1]["record_id"] == "L1"
    assert body["skippedRecords"][-1]["error_type"] == "UnknownSource"


def test_missing_sanitized_total_is_bad_request(client, payload):
    payload["sanitizedTotals"] = payload["sanitizedTotals"][:2]

    response = client.post("/reconcile", json=payload)

    assert response.status_code == 400
    assert "OCC" in response.json()["detail"]


def test_bad_config_override_is_bad_request(client, payload):
    payload["config"] = {"tolerance": "-5"}

    response = client.post("/reconcile", json=payload)

    assert response.status_code == 400


def test_missing_business_date_rejected(client, payload):
    del payload["businessDate"]

    response = client.post("/reconcile", json=payload)

    assert response.status_code == 422


def test_rules_listing(client):
    response = client.get("/rules", params={"businessDate": "2024-03-15"})

    assert response.status_code == 200
    rules = response.json()
    assert [rule["source"] for rule in rules] == ["DTCC", "CLS", "OCC"]
    assert "2024-03-15" in rules[1]["requirements"][0]


def test_unparseable_amount_reported_as_skip(client, payload):
    payload["records"][4]["payin"] = "2OO.00"
    payload["sanitizedTotals"][1] = {"sourceSystem": "CLS", "recordCount": 1, "totalAmount": "365.00"}

    body = client.post("/reconcile", json=payload).json()

    assert body["allMatch"] is True
    assert body["results"][1]["skippedCount"] == 1
    assert [s["record_id"] for s in body["skippedRecords"]] == ["C2"]


def test_non_object_config_rejected(client, payload):
    payload["config"] = [1, 2]

    response = client.post("/reconcile", json=payload)

    assert response.status_code == 422
